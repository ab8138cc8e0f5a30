# module paygate.app
from paygate.app_setup.factory import create_app

# App globale
app = create_app()

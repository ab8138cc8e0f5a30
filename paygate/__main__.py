"""
python -m paygate: sert l'API checkout avec uvicorn.
PORT (8000), UVICORN_RELOAD ("1"/"true"/"yes") et LOG_LEVEL ("info") sont lus dans l'environnement.
"""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "paygate.asgi:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=os.getenv("LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()

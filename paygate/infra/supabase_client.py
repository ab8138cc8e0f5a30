from supabase import create_client, Client

def create_store_client(url: str, key: str) -> Client:
    """
    Client Supabase éphémère pour lire la configuration du site.
    Pas de singleton: url/key sont relus à chaque requête par l'appelant.
    """
    if not url or not key:
        raise ValueError("url and key are required")
    return create_client(url, key)

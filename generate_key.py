"""Print a SECRET_KEY line suitable for pasting into .env"""
import secrets


def generate_secret_key(nbytes: int = 32) -> str:
    """Return a random hex key, ``nbytes`` bytes long (64 hex chars by default)."""
    return secrets.token_hex(nbytes)


if __name__ == "__main__":
    print(f"SECRET_KEY={generate_secret_key()}")

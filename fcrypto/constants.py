# Product naming and format version
PRODUCT = "fcrypto"
FORMAT_VERSION = 0
BANNER = f"# Encrypted {PRODUCT} file\n\n".encode("ascii")
MARKER = f"{PRODUCT.upper()}_V{FORMAT_VERSION}:"  # first meaningful line of a container

# Key derivation: sha256("[" + password + "][" + DOMAIN_TAG + "]")
DOMAIN_TAG = PRODUCT

# Sizes (bytes)
KEY_SIZE = 32
NONCE_SIZE = 24
TAG_SIZE = 16

# Lines starting with these are skipped when looking for the marker
COMMENT_PREFIXES = ("#", ";")

# Mode for newly created files; existing files keep theirs
DEFAULT_FILE_MODE = 0o600

# Environment variable consulted by the CLI before prompting
ENV_PASSWORD = f"{PRODUCT.upper()}_PASSWORD"

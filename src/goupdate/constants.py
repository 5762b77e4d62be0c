"""Centralized constants for goupdate."""

# Distribution index
DEFAULT_BASE_URL = "https://go.dev/dl/"
CATALOG_QUERY = {"mode": "json"}

# The index varies its response on these, plain client identifiers get rejected
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36"
)

# HTTP (seconds)
DEFAULT_REQUEST_TIMEOUT = 30

# Installation layout
DEFAULT_DOWNLOAD_DIR = "/tmp"
DEFAULT_INSTALL_DIR = "/usr/local/go"
DEFAULT_OWNER = "root:root"
EXTRACTED_DIR_NAME = "go"

# wget
WGET_TRIES = 5
WGET_READ_TIMEOUT = 10

# External tools checked by --doctor
REQUIRED_COMMANDS = ("wget", "tar")

# Checksum verification read size
HASH_CHUNK_SIZE = 64 * 1024

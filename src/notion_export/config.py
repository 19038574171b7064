"""Configuration constants for notion-export."""

# Notion REST API.
API_BASE_URL: str = "https://api.notion.com/v1"
NOTION_VERSION: str = "2022-06-28"
PAGE_SIZE: int = 100

# Environment variable holding the integration token.
TOKEN_ENV_VAR: str = "NOTION_TOKEN"

# Output location, used when no directory is passed on the command line.
DEFAULT_OUTPUT_DIR: str = "./export"

# Output layout: <dir>/<slug>_<id8>/index.md and <dir>/<slug>_<id8>/assets/<sha256><ext>
DOCUMENT_NAME: str = "index.md"
ASSETS_DIR_NAME: str = "assets"
DEFAULT_ASSET_EXT: str = ".bin"
PAGE_ID_PREFIX_LEN: int = 8
SLUG_MAX_LEN: int = 100

# Binary downloads give up after this many redirect hops.
MAX_REDIRECTS: int = 5

# Pages nested deeper than this are not exported.
MAX_PAGE_DEPTH: int = 64

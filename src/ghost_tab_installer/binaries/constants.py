"""Release store coordinates for the ghost-tab-tui binary."""

RELEASE_BASE_URL = "https://github.com"
REPOSITORY = "JackUait/ghost-tab"
RELEASES_PATH = "releases"
DOWNLOAD_PATH = "download"

BINARY_NAME = "ghost-tab-tui"
VERSION_PREFIX = "v"
URL_TEMPLATE = (
    "{base_url}/{repo}/{releases}/{download}/{version_prefix}{version}/"
    "{binary}-{os_name}-{arch}"
)

VERSION_FLAG = "--version"
VERSION_TOKEN = "version"

PROBE_TIMEOUT = 5  # seconds
DOWNLOAD_TIMEOUT = 300  # seconds
CHUNK_SIZE = 8192

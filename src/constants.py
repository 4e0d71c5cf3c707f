"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_REPOSITORY_URLS = ["https://repo.maven.apache.org/maven2/"]
    # Temporary failures against these hosts abort the whole lookup
    PRIMARY_REPOSITORY_HOSTS = (
        "central.maven.org",
        "repo1.maven.org",
        "repo.maven.apache.org",
    )
    METADATA_FILE = "maven-metadata.xml"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "MVNRELEASES_LOG_LEVEL"
    CONFIG_ENV = "MVNRELEASES_CONFIG"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "mvnreleases/0.1"

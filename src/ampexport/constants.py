from typing import Final

# Export API endpoints (https://amplitude.com/docs/apis/analytics/export)
EXPORT_URL: Final = "https://amplitude.com/api/2/export"
EU_EXPORT_URL: Final = "https://analytics.eu.amplitude.com/api/2/export"

# Dec 1 2024 00:00 - 26 May 2025 23:59
DEFAULT_START: Final = "20241201T00"
DEFAULT_END: Final = "20250526T23"

DEFAULT_OUTPUT: Final = "amplitude-export.zip"

API_KEY_ENV: Final = "AMPLITUDE_PROJECT_API_KEY"
SECRET_KEY_ENV: Final = "AMPLITUDE_PROJECT_SECRET_KEY"
CONFIG_ENV: Final = "AMPEXPORT_CONFIG"

TIMESTAMP_FORMAT: Final = "%Y%m%dT%H"
DOWNLOAD_CHUNK_SIZE: Final = 8192

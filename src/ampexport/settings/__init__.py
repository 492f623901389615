"""Export settings management.

This package provides:
- ExportSettings: Run settings loaded from an optional YAML config file
- SAMPLE_CONFIG_YAML: Template written by ``config init``
"""

from ampexport.settings.user import ExportSettings

SAMPLE_CONFIG_YAML = """\
# Amplitude export settings. Credentials are read from the
# AMPLITUDE_PROJECT_API_KEY and AMPLITUDE_PROJECT_SECRET_KEY
# environment variables (or a .env file), never from this file.
start: "20241201T00"
end: "20250526T23"
output: amplitude-export.zip
region: us
# endpoint: https://amplitude.com/api/2/export
# timeout: 600
# extract_dir: export
"""

__all__ = ["SAMPLE_CONFIG_YAML", "ExportSettings"]

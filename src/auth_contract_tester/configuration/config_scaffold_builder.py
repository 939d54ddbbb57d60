"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Test configuration template for auth-contract-tester.
# Replace every <REQUIRED> placeholder before running run.
# Remove or fill <OPTIONAL> entries; omitted entries fall back to defaults.

target:
  # Absolute base URI of the service exposing the authentication endpoint.
  base_uri: "<REQUIRED>"
  endpoint_path: "/auth"
  timeout_seconds: 10

# Overrides for the built-in credential fixtures.
# The empty-credentials fixture is fixed and cannot be overridden.
# credentials:
#   valid:
#     user_name: "<OPTIONAL>"
#     password: "<OPTIONAL>"
#   invalid:
#     user_name: "<OPTIONAL>"
#     password: "<OPTIONAL>"

report:
  # Relative paths resolve against this file's directory.
  path: "reports/detailed-api-report.txt"

run:
  # Number of scenarios executed concurrently.
  parallelism: 1
"""


def build_placeholder_configuration() -> str:
    """Build a YAML test configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder test configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Test configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

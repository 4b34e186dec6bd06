"""Create a starter dependawhat config file."""

from pathlib import Path
from typing import Optional

from ..config import default_config_path


CONFIG_TEMPLATE = '''# dependawhat configuration
#
# The GitHub token can also come from --github-token or USER_GITHUB_TOKEN.
# github-token: ghp_xxx

global:
  # Exact names, versioned names (pkg@v1) or one of
  # *alpha*, *beta*, *rc*, */v0
  denied_packages:
    - "*alpha*"
    - "*beta*"
  # Organization names, case-insensitive
  denied_orgs: []

repositories:
  # owner/repo:
  #   denied_packages:
  #     - github.com/aws/aws-sdk-go
  #   denied_orgs:
  #     - datadog
'''


def init_config(target: Optional[Path] = None) -> bool:
    """
    Write a starter config file.

    Creates ~/.dependawhat/config.yaml unless another path is given.
    An existing file is left untouched.

    Returns:
        True if the file was written or already exists
    """
    config_file = target or default_config_path()

    if config_file.exists():
        print(f"Already exists: {config_file}")
        return True

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(CONFIG_TEMPLATE)
    except OSError as e:
        print(f"Error: cannot write {config_file}: {e}")
        return False

    print(f"Created: {config_file}")
    print("\nNext steps:")
    print("  1. Add repositories under 'repositories'")
    print("  2. export USER_GITHUB_TOKEN=<token>")
    print("  3. dependawhat check")

    return True

"""Google Apps administration client package.

To use the Directory API:
    from gapps_admin.config import ClientConfig
    from gapps_admin.core.directory import Provisioning

To load configuration from the environment:
    from gapps_admin.config import load_settings
"""

__version__ = "1.1.1"

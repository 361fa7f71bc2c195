"""
Factory for creating adapter instances.
"""

from qiniu_adapter.storage.filesystem import AdapterConfig
from qiniu_adapter.storage.qiniu_storage import QiniuAdapter
from qiniu_adapter.utils.env_config import AppSettings


def create_adapter(settings: AppSettings) -> QiniuAdapter | None:
    """Create an adapter based on configuration."""
    config_dict = settings.get_storage_config()

    # every field must be set and non-blank
    required = ("access_key", "secret_key", "bucket", "domain")
    if all(config_dict.get(name) and config_dict[name].strip() for name in required):
        config = AdapterConfig(**config_dict)
        return QiniuAdapter(config)
    return None

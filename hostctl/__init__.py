"""
hostctl - 带标签的 hosts 文件管理工具
"""

__version__ = "1.0.0"
__author__ = "hostctl Project"

from hostctl.config import Config
from hostctl.models import HostEntry

__all__ = ["Config", "HostEntry", "__version__"]

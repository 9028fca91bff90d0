"""
管理员权限检查
"""

import ctypes
import os
import platform

from hostctl.errors import PrivilegeError


def is_admin() -> bool:
    """跨平台权限验证，无法判断时视为非管理员"""
    try:
        if platform.system() == "Windows":
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        return os.geteuid() == 0
    except (AttributeError, OSError):
        return False


def ensure_admin() -> None:
    """
    确保以管理员身份运行

    异常:
        PrivilegeError: 当前进程没有管理员权限
    """
    if not is_admin():
        raise PrivilegeError("修改 hosts 文件需要管理员权限")

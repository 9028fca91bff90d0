"""
平台相关的默认文件路径
"""

import os
import platform


def default_hosts_path() -> str:
    """获取跨平台 hosts 文件路径"""
    if platform.system() == "Windows":
        system_root = os.environ.get("SystemRoot", r"C:\Windows")
        return os.path.join(system_root, "System32", "drivers", "etc", "hosts")
    return "/etc/hosts"


def default_tags_path() -> str:
    """获取标签元数据文件路径"""
    if platform.system() == "Windows":
        data_dir = os.environ.get("ProgramData", r"C:\ProgramData")
        return os.path.join(data_dir, "hostctl", "hosts.tags.json")
    return "/var/lib/hostctl/hosts.tags.json"

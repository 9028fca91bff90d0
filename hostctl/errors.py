"""
hostctl 异常定义

所有组件只抛出异常，由命令行层统一转换为一行错误输出和退出码 1。
"""


class HostctlError(Exception):
    """hostctl 所有业务错误的基类"""


class ValidationError(HostctlError):
    """缺少必需选项或选项值无效"""


class HostNotFoundError(HostctlError):
    """hosts 文件中找不到指定主机名"""

    def __init__(self, host: str):
        super().__init__(f"hosts 文件中找不到主机: {host}")
        self.host = host


class EntryParseError(HostctlError):
    """匹配到的行无法解析为条目"""

    def __init__(self, host: str):
        super().__init__(f"无法解析主机所在行: {host}")
        self.host = host


class HostExistsError(HostctlError):
    """添加的主机名已存在"""

    def __init__(self, host: str):
        super().__init__(f"主机名已存在: {host}")
        self.host = host


class PrivilegeError(HostctlError):
    """修改 hosts 文件需要管理员权限"""


class BackupExistsError(HostctlError):
    """同名备份文件已存在（同一秒内的重复备份）"""

    def __init__(self, backup_path: str):
        super().__init__(f"备份文件已存在: {backup_path}")
        self.backup_path = backup_path

"""
hostctl 数据模型
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class HostEntry:
    """
    代表 hosts 文件中的单个条目

    每次读取都从文件行重新解析，没有持久化的身份。

    属性:
        ip: IP 地址文本（IPv4 或 IPv6，解析时不校验）
        hostname: 主机名
        comment: 行尾注释（没有则为空字符串）
    """

    ip: str
    hostname: str
    comment: str = ""

    def to_hosts_line(self) -> str:
        """
        转换为 hosts 文件行格式

        格式: <IP> <主机名>[  # <注释>]

        返回:
            格式化的 hosts 文件行
        """
        if self.comment.strip():
            return f"{self.ip} {self.hostname}  # {self.comment}"
        return f"{self.ip} {self.hostname}"

    def __str__(self) -> str:
        return f"{self.hostname} -> {self.ip}"


@dataclass(frozen=True)
class Row:
    """
    列表展示用的行：条目与其标签的组合，不持久化

    属性:
        ip: IP 地址文本
        host: 主机名
        tags: 按字母顺序（忽略大小写）排列的标签
        comment: 注释
    """

    ip: str
    host: str
    tags: Tuple[str, ...] = field(default_factory=tuple)
    comment: str = ""

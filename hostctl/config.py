"""
配置管理模块，支持环境变量和按命令划分的类型化选项
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hostctl.errors import ValidationError
from hostctl.paths import default_hosts_path, default_tags_path


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    """空字符串和纯空白视为未设置"""
    if value is None or not value.strip():
        return None
    return value


def _has_control_chars(value: str, allow_tab: bool = False) -> bool:
    return any(
        (ord(ch) < 32 and not (allow_tab and ch == "\t")) or ord(ch) == 127
        for ch in value
    )


def check_field(value: str, option: str) -> str:
    """
    校验写入 hosts 行的单个字段（IP 或主机名）

    字段不能包含空白、"#" 或控制字符，否则写回后会被解析为其他内容。

    异常:
        ValidationError: 字段无效
    """
    if any(ch.isspace() for ch in value) or "#" in value or _has_control_chars(value):
        raise ValidationError(f"{option} 的值无效: {value!r}")
    return value


def check_comment(value: Optional[str]) -> Optional[str]:
    """注释不能包含换行等控制字符（制表符除外）"""
    if value is not None and _has_control_chars(value, allow_tab=True):
        raise ValidationError(f"--comment 的值无效: {value!r}")
    return value


def split_csv(value: Optional[str]) -> List[str]:
    """
    拆分逗号分隔的列表

    每项去除首尾空白，空项被丢弃。

    参数:
        value: 逗号分隔的文本，可以为 None

    返回:
        非空项列表
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Config:
    """应用配置类，从环境变量加载配置"""

    hosts_file_path: str = field(default_factory=default_hosts_path)
    tags_file_path: str = field(default_factory=default_tags_path)
    require_admin: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """
        从环境变量加载配置

        环境变量说明:
            HOSTS_FILE: hosts 文件路径 (默认: 系统 hosts 文件)
            HOSTCTL_TAGS_FILE: 标签元数据文件路径 (默认: 系统数据目录下的 hosts.tags.json)
            HOSTCTL_REQUIRE_ADMIN: 修改操作是否检查管理员权限 (默认: true)
            LOG_LEVEL: 日志级别 (默认: WARNING)
        """
        return cls(
            hosts_file_path=os.getenv("HOSTS_FILE") or default_hosts_path(),
            tags_file_path=os.getenv("HOSTCTL_TAGS_FILE") or default_tags_path(),
            require_admin=os.getenv("HOSTCTL_REQUIRE_ADMIN", "true").lower() != "false",
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper()
        )

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )


class SortKey(Enum):
    """list 命令支持的排序键"""

    IP = "ip"
    NAME = "name"
    TAG = "tag"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SortKey"]:
        """未知或缺省的值返回 None，即保持文件顺序"""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ListOptions:
    """list 命令选项"""

    tag: Optional[str] = None
    show_all: bool = False
    sort: Optional[SortKey] = None
    desc: bool = False

    @classmethod
    def from_raw(cls, tag: Optional[str] = None, show_all: bool = False,
                 sort: Optional[str] = None, desc: bool = False) -> "ListOptions":
        tag = _blank_to_none(tag)
        return cls(
            tag=tag.strip() if tag else None,
            show_all=show_all,
            sort=SortKey.parse(sort),
            desc=desc
        )


@dataclass(frozen=True)
class AddOptions:
    """
    add 命令选项

    属性:
        ip: 新条目的 IP
        hostnames: 至少一个主机名，每个主机名写一行
        tags: 附加到每个新主机名的标签
        comment: 可选的行尾注释
    """

    ip: str
    hostnames: List[str]
    tags: List[str] = field(default_factory=list)
    comment: Optional[str] = None

    @classmethod
    def from_raw(cls, ip: Optional[str], host: Optional[str],
                 tag: Optional[str] = None, comment: Optional[str] = None) -> "AddOptions":
        """
        从命令行原始值构建选项

        异常:
            ValidationError: 缺少 --ip 或 --host
        """
        ip = _blank_to_none(ip)
        if ip is None:
            raise ValidationError("缺少必需选项: --ip")
        hostnames = split_csv(host)
        if not hostnames:
            raise ValidationError("缺少必需选项: --host")
        return cls(
            ip=check_field(ip.strip(), "--ip"),
            hostnames=[check_field(h, "--host") for h in hostnames],
            tags=split_csv(tag),
            comment=check_comment(_blank_to_none(comment))
        )


@dataclass(frozen=True)
class EditOptions:
    """
    edit 命令选项

    属性:
        host: 要修改的现有主机名
        ip: 新 IP，None 表示不变
        rename: 新主机名，None 表示不变
        tag_ops: 逗号分隔的标签操作，如 "+web,-old"
    """

    host: str
    ip: Optional[str] = None
    rename: Optional[str] = None
    tag_ops: Optional[str] = None

    @classmethod
    def from_raw(cls, host: Optional[str], ip: Optional[str] = None,
                 rename: Optional[str] = None, tag: Optional[str] = None) -> "EditOptions":
        host = _blank_to_none(host)
        if host is None:
            raise ValidationError("缺少必需选项: --host（现有主机名）")
        ip = _blank_to_none(ip)
        rename = _blank_to_none(rename)
        return cls(
            host=host.strip(),
            ip=check_field(ip.strip(), "--ip") if ip else None,
            rename=check_field(rename.strip(), "--rename") if rename else None,
            tag_ops=_blank_to_none(tag)
        )


@dataclass(frozen=True)
class RemoveOptions:
    """remove 命令选项"""

    host: str

    @classmethod
    def from_raw(cls, host: Optional[str]) -> "RemoveOptions":
        host = _blank_to_none(host)
        if host is None:
            raise ValidationError("缺少必需选项: --host")
        return cls(host=host.strip())

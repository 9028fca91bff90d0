"""
列表视图：连接标签、过滤与排序
"""

import ipaddress
from typing import Iterable, List, Optional, Tuple

from hostctl.config import ListOptions, SortKey
from hostctl.models import HostEntry, Row
from hostctl.tags import TagSet

# 无法解析的 IP 排在最后
INVALID_IP_KEY = b"\xff" * 16

IPV4_MAPPED_PREFIX = b"\x00" * 10 + b"\xff\xff"


def ip_sort_key(ip: str) -> bytes:
    """
    计算 IP 的 16 字节可比较表示

    IPv4 映射为 ::ffff:a.b.c.d，使 IPv4 与 IPv6 可以统一比较。

    参数:
        ip: IP 文本

    返回:
        16 字节键，无法解析时为全 0xFF
    """
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError:
        return INVALID_IP_KEY
    if address.version == 4:
        return IPV4_MAPPED_PREFIX + address.packed
    return address.packed


def build_rows(entries: Iterable[Tuple[HostEntry, str]], tag_set: TagSet,
               options: ListOptions) -> List[Row]:
    """
    将条目与标签连接为行，并按标签过滤

    参数:
        entries: (条目, 原始行) 序列，按文件顺序
        tag_set: 标签映射
        options: list 命令选项

    返回:
        文件顺序的行
    """
    rows: List[Row] = []
    for entry, raw in entries:
        # 纯注释行不会被解析为条目，因此 show_all 目前不会带来额外的行
        if not options.show_all and raw.lstrip().startswith("#"):
            continue

        host_tags = tag_set.get(entry.hostname)
        if options.tag and (host_tags is None or options.tag not in host_tags):
            continue

        rows.append(Row(
            ip=entry.ip,
            host=entry.hostname,
            tags=tuple(host_tags.sorted()) if host_tags else (),
            comment=entry.comment
        ))
    return rows


def sort_rows(rows: List[Row], sort: Optional[SortKey], desc: bool = False) -> List[Row]:
    """
    按指定键排序，带确定性的次级键

    ip: IP 键，其次主机名
    name: 主机名（忽略大小写），其次 IP 键
    tag: 第一个标签（无标签为空串，排最前），其次主机名，再次 IP 键
    其他: 保持文件顺序

    desc 反转最终的完整序列。
    """
    if sort is SortKey.IP:
        result = sorted(rows, key=lambda r: (ip_sort_key(r.ip), r.host.lower()))
    elif sort is SortKey.NAME:
        result = sorted(rows, key=lambda r: (r.host.lower(), ip_sort_key(r.ip)))
    elif sort is SortKey.TAG:
        result = sorted(rows, key=lambda r: (
            r.tags[0].lower() if r.tags else "",
            r.host.lower(),
            ip_sort_key(r.ip)
        ))
    else:
        result = list(rows)

    if desc:
        result.reverse()
    return result


def list_rows(entries: Iterable[Tuple[HostEntry, str]], tag_set: TagSet,
              options: ListOptions) -> List[Row]:
    """过滤并排序，得到最终展示的行"""
    return sort_rows(build_rows(entries, tag_set, options), options.sort, options.desc)

"""
hosts 文件行解析模块
"""

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from hostctl.models import HostEntry


def parse_entry(line: str) -> Optional[HostEntry]:
    """
    将一行原始文本解析为条目

    第一个 '#' 之后的内容作为注释。注释前至少需要两个非空白字段：
    第一个是 IP，第二个是主机名，其余别名被丢弃。IP 不做格式校验。

    参数:
        line: hosts 文件中的一行

    返回:
        HostEntry，空行、纯注释行或字段不足时返回 None
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    comment = ""
    content, sep, rest = trimmed.partition("#")
    if sep:
        comment = rest.strip()
    content = content.strip()
    if not content:
        return None

    parts = content.split()
    if len(parts) < 2:
        return None

    return HostEntry(ip=parts[0], hostname=parts[1], comment=comment)


def enumerate_entries(lines: Iterable[str]) -> Iterator[Tuple[Optional[HostEntry], str]]:
    """逐行解析，产出 (条目或 None, 原始行)"""
    for line in lines:
        yield parse_entry(line), line


def find_host_line_index(lines: Sequence[str], host: str) -> int:
    """
    查找第一个主机名匹配的行（忽略大小写）

    参数:
        lines: 文件行
        host: 主机名

    返回:
        行号（从 0 开始），找不到返回 -1
    """
    wanted = host.lower()
    for idx, (entry, _) in enumerate(enumerate_entries(lines)):
        if entry is not None and entry.hostname.lower() == wanted:
            return idx
    return -1

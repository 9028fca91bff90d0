"""
固定宽度文本表格输出
"""

from typing import Iterable, List

from hostctl.models import Row
from hostctl.tags import TagSet

W_IP = 14
W_HOST = 27
W_TAGS = 19
W_COMMENT_SEP = 27

ELLIPSIS = "…"


def pad_or_trim(value: str, width: int) -> str:
    """
    将文本调整为固定宽度

    较短时右侧补空格；较长时截为 width-1 个字符加省略号。
    """
    if len(value) <= width:
        return value.ljust(width)
    if width < 1:
        return value
    return value[:width - 1] + ELLIPSIS


def render_table(rows: Iterable[Row]) -> List[str]:
    """
    渲染列表表格

    返回:
        表头、分隔线和数据行
    """
    lines = [
        f"{pad_or_trim('IP', W_IP)}  {pad_or_trim('HOSTNAME', W_HOST)}  "
        f"{pad_or_trim('TAGS', W_TAGS)}  COMMENT",
        "  ".join("-" * w for w in (W_IP, W_HOST, W_TAGS, W_COMMENT_SEP)),
    ]
    for row in rows:
        lines.append(
            f"{pad_or_trim(row.ip, W_IP)}  {pad_or_trim(row.host, W_HOST)}  "
            f"{pad_or_trim(','.join(row.tags), W_TAGS)}  {row.comment}"
        )
    return lines


def render_tags(tag_set: TagSet) -> List[str]:
    """渲染 tags 命令的输出：每个主机名一行"""
    if not len(tag_set):
        return ["(no tags)"]
    return [f"{hostname}: {', '.join(tags.sorted())}" for hostname, tags in tag_set.items()]

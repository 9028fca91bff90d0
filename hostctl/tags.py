"""
标签元数据存储模块

hosts 文件格式不支持标签，标签保存在独立的 JSON 文件中：
主机名 -> 标签列表。主机名和标签都不区分大小写。
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


def _ci_sorted(values: Iterable[str]) -> List[str]:
    return sorted(values, key=lambda v: (v.lower(), v))


class HostTags:
    """
    单个主机名的标签集合

    成员判断不区分大小写，保留第一次出现时的大小写。
    """

    def __init__(self, tags: Iterable[str] = ()):
        self._tags: Dict[str, str] = {}
        self.update(tags)

    def add(self, tag: str) -> bool:
        """添加标签，已存在（忽略大小写）时返回 False"""
        key = tag.lower()
        if key in self._tags:
            return False
        self._tags[key] = tag
        return True

    def update(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.add(tag)

    def discard(self, tag: str) -> bool:
        """移除标签，不存在时返回 False"""
        return self._tags.pop(tag.lower(), None) is not None

    def sorted(self) -> List[str]:
        """按字母顺序（忽略大小写）返回标签"""
        return _ci_sorted(self._tags.values())

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.lower() in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags.values()))

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"HostTags({self.sorted()!r})"


class TagSet:
    """
    主机名到标签集合的映射

    以小写主机名为键，同时保存最近一次写入时的原始大小写，
    保存到文件时使用该大小写。
    """

    def __init__(self):
        self._hosts: Dict[str, Tuple[str, HostTags]] = {}

    @classmethod
    def from_dict(cls, data: Dict[str, Optional[List[str]]]) -> "TagSet":
        """
        从 JSON 映射构建

        仅大小写不同的重复主机名会被合并。
        """
        tag_set = cls()
        for hostname, tags in data.items():
            tag_set.get_or_create(hostname).update(tags or [])
        return tag_set

    def to_dict(self) -> Dict[str, List[str]]:
        """转换为可序列化映射，主机名和标签均已排序"""
        return {hostname: tags.sorted() for hostname, tags in self.items()}

    def get(self, hostname: str) -> Optional[HostTags]:
        record = self._hosts.get(hostname.lower())
        return record[1] if record else None

    def get_or_create(self, hostname: str) -> HostTags:
        """
        获取主机名的标签集合，不存在时创建

        已存在时用传入的写法更新主机名的大小写。
        """
        key = hostname.lower()
        record = self._hosts.get(key)
        tags = record[1] if record else HostTags()
        self._hosts[key] = (hostname, tags)
        return tags

    def pop(self, hostname: str) -> Optional[HostTags]:
        """删除主机名，返回被删除的标签集合"""
        record = self._hosts.pop(hostname.lower(), None)
        return record[1] if record else None

    def rename(self, old: str, new: str) -> bool:
        """
        将旧主机名的标签合并到新主机名下并删除旧键

        参数:
            old: 原主机名
            new: 新主机名

        返回:
            映射是否发生变化
        """
        if old.lower() == new.lower():
            if old.lower() in self._hosts:
                self.get_or_create(new)
                return True
            return False

        old_tags = self.pop(old)
        if old_tags is None:
            return False
        self.get_or_create(new).update(old_tags)
        return True

    def items(self) -> List[Tuple[str, HostTags]]:
        """按主机名（忽略大小写）排序的 (主机名, 标签集合) 列表"""
        records = list(self._hosts.values())
        return sorted(records, key=lambda r: (r[0].lower(), r[0]))

    def __contains__(self, hostname: object) -> bool:
        return isinstance(hostname, str) and hostname.lower() in self._hosts

    def __len__(self) -> int:
        return len(self._hosts)


def apply_tag_ops(tags: HostTags, ops: str) -> None:
    """
    应用逗号分隔的标签操作

    "+tag" 添加，"-tag" 移除，不带前缀的 "tag" 添加。

    参数:
        tags: 要修改的标签集合
        ops: 如 "+web,-old,dev"
    """
    for op in (part.strip() for part in ops.split(",")):
        if not op:
            continue
        if op.startswith("+"):
            name = op[1:].strip()
            if name:
                tags.add(name)
        elif op.startswith("-"):
            tags.discard(op[1:].strip())
        else:
            tags.add(op)


class TagStore:
    """
    标签元数据文件的读写

    每次保存都整体覆盖文件。
    """

    def __init__(self, tags_path: str, logger: logging.Logger):
        """
        初始化标签存储

        参数:
            tags_path: 标签元数据 JSON 文件路径
            logger: 日志记录器实例
        """
        self.tags_path = Path(tags_path)
        self.logger = logger

    def load(self) -> TagSet:
        """
        加载标签映射

        返回:
            TagSet，文件不存在时为空映射

        异常:
            ValueError: 文件内容不是 主机名 -> 字符串列表 的 JSON 映射
        """
        if not self.tags_path.exists():
            self.logger.debug(f"标签文件不存在，使用空映射: {self.tags_path}")
            return TagSet()

        with open(self.tags_path, "r", encoding="utf-8") as f:
            text = f.read()

        if not text.strip():
            return TagSet()

        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"标签文件格式无效: {self.tags_path}")
        for hostname, tags in data.items():
            if tags is None:
                continue
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise ValueError(f"标签文件格式无效: {self.tags_path} ({hostname})")

        tag_set = TagSet.from_dict(data)
        self.logger.debug(f"已加载 {len(tag_set)} 个主机名的标签")
        return tag_set

    def save(self, tag_set: TagSet) -> None:
        """
        保存标签映射（整体覆盖）

        参数:
            tag_set: 要保存的映射

        异常:
            OSError: 如果文件系统操作失败
        """
        self.tags_path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(tag_set.to_dict(), indent=2, ensure_ascii=False) + "\n"

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.tags_path.parent,
            prefix='.tags.tmp.',
            text=True
        )
        try:
            with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                f.write(content)
            os.replace(temp_path, self.tags_path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        self.logger.info(f"已保存 {len(tag_set)} 个主机名的标签: {self.tags_path}")

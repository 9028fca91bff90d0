"""
条目仓库：添加、修改、删除 hosts 条目，并同步标签元数据
"""

import logging
from typing import List, Tuple

from hostctl.backup import BackupManager
from hostctl.config import AddOptions, EditOptions, RemoveOptions
from hostctl.errors import EntryParseError, HostExistsError, HostNotFoundError
from hostctl.hosts_manager import HostsFile
from hostctl.models import HostEntry
from hostctl.parser import enumerate_entries, find_host_line_index, parse_entry
from hostctl.tags import TagStore, apply_tag_ops


class EntryRepository:
    """
    协调 hosts 文件与标签存储的修改

    每个操作都是一次性的 读取 -> 校验 -> 修改 -> 持久化 流程：
    校验失败时两个文件都不会被触碰；写入顺序固定为
    备份 -> 写 hosts 文件 -> 写标签文件。两个文件之间没有事务，
    hosts 写入成功而标签写入失败时，标签会在该次操作中过期。
    """

    def __init__(
        self,
        hosts_file: HostsFile,
        backups: BackupManager,
        tag_store: TagStore,
        logger: logging.Logger
    ):
        self.hosts_file = hosts_file
        self.backups = backups
        self.tag_store = tag_store
        self.logger = logger

    def entries(self) -> List[Tuple[HostEntry, str]]:
        """读取所有可解析的条目及其原始行"""
        return [
            (entry, raw)
            for entry, raw in enumerate_entries(self.hosts_file.read_lines())
            if entry is not None
        ]

    def _commit(self, lines: List[str]) -> None:
        self.backups.snapshot()
        self.hosts_file.write_lines(lines)

    def add(self, options: AddOptions) -> List[HostEntry]:
        """
        为每个主机名追加一行条目

        任一主机名已存在（忽略大小写，包括同一批次内重复）时整批失败，
        不写入任何内容。

        参数:
            options: add 命令选项

        返回:
            新增的条目

        异常:
            HostExistsError: 主机名已存在
        """
        lines = self.hosts_file.read_lines()
        existing = {
            entry.hostname.lower()
            for entry, _ in enumerate_entries(lines)
            if entry is not None
        }

        added: List[HostEntry] = []
        for hostname in options.hostnames:
            if hostname.lower() in existing:
                raise HostExistsError(hostname)
            existing.add(hostname.lower())
            added.append(HostEntry(ip=options.ip, hostname=hostname, comment=options.comment or ""))

        self._commit(lines + [entry.to_hosts_line() for entry in added])
        self.logger.info(f"已添加 {len(added)} 条主机记录: {', '.join(e.hostname for e in added)}")

        if options.tags:
            tag_set = self.tag_store.load()
            for entry in added:
                tag_set.get_or_create(entry.hostname).update(options.tags)
            self.tag_store.save(tag_set)

        return added

    def edit(self, options: EditOptions) -> Tuple[HostEntry, HostEntry]:
        """
        修改第一个匹配主机名的行

        注释始终原样保留。标签操作作用于新主机名的标签集合，
        主机名改变时随后再并入旧主机名的全部标签。

        参数:
            options: edit 命令选项

        返回:
            (修改前的条目, 修改后的条目)

        异常:
            HostNotFoundError: 找不到主机名
            EntryParseError: 匹配到的行无法解析
        """
        lines = self.hosts_file.read_lines()
        idx = find_host_line_index(lines, options.host)
        if idx < 0:
            raise HostNotFoundError(options.host)

        old = parse_entry(lines[idx])
        if old is None:
            raise EntryParseError(options.host)

        new = HostEntry(
            ip=options.ip or old.ip,
            hostname=options.rename or old.hostname,
            comment=old.comment
        )
        renamed = new.hostname.lower() != old.hostname.lower()
        if renamed and find_host_line_index(lines, new.hostname) >= 0:
            self.logger.warning(f"新主机名已存在于其他行: {new.hostname}")

        lines[idx] = new.to_hosts_line()
        self._commit(lines)
        self.logger.info(f"已修改主机记录: {old} => {new}")

        if options.tag_ops or new.hostname != old.hostname:
            tag_set = self.tag_store.load()
            changed = False
            if options.tag_ops:
                apply_tag_ops(tag_set.get_or_create(new.hostname), options.tag_ops)
                changed = True
            # 旧主机名的标签在标签操作之后并入，改名不会丢失已有标签
            changed = tag_set.rename(old.hostname, new.hostname) or changed
            if changed:
                self.tag_store.save(tag_set)

        return old, new

    def remove(self, options: RemoveOptions) -> HostEntry:
        """
        删除第一个匹配主机名的行及其标签

        参数:
            options: remove 命令选项

        返回:
            被删除的条目

        异常:
            HostNotFoundError: 找不到主机名
        """
        lines = self.hosts_file.read_lines()
        idx = find_host_line_index(lines, options.host)
        if idx < 0:
            raise HostNotFoundError(options.host)

        removed = parse_entry(lines.pop(idx))
        self._commit(lines)
        self.logger.info(f"已移除主机记录: {removed}")

        tag_set = self.tag_store.load()
        if tag_set.pop(options.host) is not None:
            self.tag_store.save(tag_set)

        return removed

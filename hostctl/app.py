"""
hostctl 主应用模块
"""

import logging
import sys
from typing import Callable, List, Optional

from hostctl.backup import BackupManager
from hostctl.config import AddOptions, Config, EditOptions, ListOptions, RemoveOptions
from hostctl.hosts_manager import HostsFile
from hostctl.listing import list_rows
from hostctl.privilege import ensure_admin
from hostctl.render import render_table, render_tags
from hostctl.repository import EntryRepository
from hostctl.tags import TagStore


class HostCtl:
    """
    主应用控制器，协调所有组件

    每次命令行调用执行一个命令：
    - list / tags 只读
    - add / edit / remove / backup 需要管理员权限，写入前先备份
    """

    def __init__(self, config: Config, privilege_check: Optional[Callable[[], None]] = None):
        """
        初始化应用

        参数:
            config: 应用配置
            privilege_check: 权限检查函数，默认为 ensure_admin

        异常:
            ValueError: 如果配置无效
        """
        self.config = config
        self.config.validate()

        self.logger = self._setup_logging()
        self.privilege_check = privilege_check or ensure_admin

        # 初始化组件
        self.hosts_file = HostsFile(config.hosts_file_path, self.logger)
        self.backups = BackupManager(config.hosts_file_path, self.logger)
        self.tag_store = TagStore(config.tags_file_path, self.logger)
        self.repository = EntryRepository(
            self.hosts_file,
            self.backups,
            self.tag_store,
            self.logger
        )

    def _setup_logging(self) -> logging.Logger:
        """
        配置日志系统

        日志写到 stderr，stdout 只用于命令输出。

        返回:
            配置好的日志记录器实例
        """
        logger = logging.getLogger('hostctl')
        logger.setLevel(self.config.log_level)

        # 避免重复的处理器
        if logger.handlers:
            return logger

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(self.config.log_level)

        # 格式: 时间戳 - 名称 - 级别 - 消息
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def _require_admin(self) -> None:
        if self.config.require_admin:
            self.privilege_check()

    def list_entries(self, options: ListOptions) -> List[str]:
        """列出条目，返回表格行"""
        entries = self.repository.entries()
        tag_set = self.tag_store.load()
        rows = list_rows(entries, tag_set, options)
        self.logger.debug(f"共 {len(entries)} 条记录，显示 {len(rows)} 条")
        return render_table(rows)

    def add(self, options: AddOptions) -> str:
        self._require_admin()
        self.repository.add(options)
        return "Added."

    def edit(self, options: EditOptions) -> str:
        self._require_admin()
        self.repository.edit(options)
        return "Edited."

    def remove(self, options: RemoveOptions) -> str:
        self._require_admin()
        self.repository.remove(options)
        return "Removed."

    def tags(self) -> List[str]:
        return render_tags(self.tag_store.load())

    def backup(self) -> str:
        self._require_admin()
        backup_path = self.backups.snapshot()
        return f"Backup created: {backup_path}"

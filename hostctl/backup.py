"""
hosts 文件备份模块
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable

from hostctl.errors import BackupExistsError

BACKUP_SUFFIX_FORMAT = ".bak_%Y%m%d_%H%M%S"


class BackupManager:
    """
    在每次写入 hosts 文件之前创建带时间戳的副本

    备份文件名精确到秒，同名备份已存在时失败而不是覆盖。
    """

    def __init__(
        self,
        hosts_path: str,
        logger: logging.Logger,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        初始化备份管理器

        参数:
            hosts_path: hosts 文件路径
            logger: 日志记录器实例
            clock: 返回当前时间的函数
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger
        self.clock = clock

    def backup_path_for(self, moment: datetime) -> Path:
        return Path(str(self.hosts_path) + moment.strftime(BACKUP_SUFFIX_FORMAT))

    def snapshot(self) -> Path:
        """
        逐字节复制 hosts 文件到同目录下的备份文件

        返回:
            备份文件路径

        异常:
            BackupExistsError: 同名备份已存在
            OSError: 源文件不存在或无权限
        """
        backup_path = self.backup_path_for(self.clock())

        try:
            with open(self.hosts_path, 'rb') as src, open(backup_path, 'xb') as dst:
                shutil.copyfileobj(src, dst)
        except FileExistsError:
            self.logger.error(f"备份文件已存在: {backup_path}")
            raise BackupExistsError(str(backup_path)) from None
        except PermissionError:
            self.logger.error(f"创建备份权限被拒绝: {backup_path}")
            raise

        self.logger.info(f"已创建备份: {backup_path}")
        return backup_path

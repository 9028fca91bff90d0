"""
Hosts 文件读写模块，支持原子性更新
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List


class HostsFile:
    """
    hosts 文件的整文件读写

    使用原子性文件操作（临时文件 + 重命名）防止文件损坏。
    不做任何加锁，并发写入者之间后写者生效。
    """

    def __init__(self, hosts_path: str, logger: logging.Logger):
        """
        初始化 hosts 文件

        参数:
            hosts_path: hosts 文件路径
            logger: 日志记录器实例
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger

    def read_lines(self) -> List[str]:
        """
        读取全部行（去掉行尾换行符）

        异常:
            FileNotFoundError: hosts 文件不存在
            PermissionError: 没有读取权限
        """
        try:
            with open(self.hosts_path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            self.logger.error(f"Hosts 文件不存在: {self.hosts_path}")
            raise
        except PermissionError:
            self.logger.error(f"读取 hosts 文件权限被拒绝: {self.hosts_path}")
            raise

        self.logger.debug(f"已读取 {len(lines)} 行: {self.hosts_path}")
        return lines

    def write_lines(self, lines: List[str]) -> None:
        """
        原子性覆盖 hosts 文件，每行以换行符结尾

        参数:
            lines: 要写入的行

        异常:
            PermissionError: 如果没有写入 hosts 文件的权限
            OSError: 如果文件系统操作失败
        """
        try:
            # 写入临时文件（同一目录）
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.hosts_path.parent,
                prefix='.hosts.tmp.',
                text=True
            )

            try:
                with os.fdopen(temp_fd, 'w', encoding='utf-8', newline='\n') as f:
                    f.writelines(f"{line}\n" for line in lines)

                # mkstemp 创建的文件权限为 0600，沿用原文件的权限
                if self.hosts_path.exists():
                    shutil.copymode(self.hosts_path, temp_path)

                os.replace(temp_path, self.hosts_path)
                self.logger.info(f"已写入 {len(lines)} 行: {self.hosts_path}")

            except Exception:
                # 出错时清理临时文件
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise

        except PermissionError:
            self.logger.error(
                f"写入 hosts 文件权限被拒绝: {self.hosts_path}. "
                "请以管理员身份运行。"
            )
            raise
        except Exception as e:
            self.logger.error(f"更新 hosts 文件失败: {e}")
            raise

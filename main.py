#!/usr/bin/env python3
"""
hostctl - 主入口点

管理 hosts 文件条目及其标签。
"""

import sys
from pathlib import Path

# 将当前目录添加到路径以导入 hostctl 模块
sys.path.insert(0, str(Path(__file__).parent))

from hostctl.cli import main


if __name__ == '__main__':
    main()

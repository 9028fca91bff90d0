"""
共享测试夹具：临时 hosts 文件、标签文件和递增时钟
"""

import itertools
import logging
from datetime import datetime, timedelta

import pytest

from hostctl.app import HostCtl
from hostctl.backup import BackupManager
from hostctl.config import Config
from hostctl.hosts_manager import HostsFile
from hostctl.repository import EntryRepository
from hostctl.tags import TagStore

SAMPLE_HOSTS = """\
# sample hosts file
127.0.0.1 localhost
::1 localhost6 ip6-localhost
192.168.0.10 nas.lan  # storage box
#10.0.0.99 disabled.lan
10.0.0.1 Router.lan
"""


@pytest.fixture(autouse=True)
def reset_hostctl_logger():
    """每个测试前后清理 hostctl 日志处理器，避免指向已关闭的流"""
    logger = logging.getLogger("hostctl")
    logger.handlers.clear()
    yield
    logger.handlers.clear()


@pytest.fixture
def logger():
    return logging.getLogger("hostctl.tests")


@pytest.fixture
def clock():
    """每次调用前进一秒的时钟，避免同一秒内备份重名"""
    base = datetime(2026, 3, 14, 9, 26, 53)
    ticks = itertools.count()
    return lambda: base + timedelta(seconds=next(ticks))


@pytest.fixture
def hosts_path(tmp_path):
    path = tmp_path / "hosts"
    path.write_text(SAMPLE_HOSTS, encoding="utf-8")
    return path


@pytest.fixture
def tags_path(tmp_path):
    return tmp_path / "meta" / "hosts.tags.json"


@pytest.fixture
def tag_store(tags_path, logger):
    return TagStore(str(tags_path), logger)


@pytest.fixture
def repository(hosts_path, tag_store, logger, clock):
    return EntryRepository(
        HostsFile(str(hosts_path), logger),
        BackupManager(str(hosts_path), logger, clock=clock),
        tag_store,
        logger
    )


@pytest.fixture
def app(hosts_path, tags_path, clock):
    config = Config(
        hosts_file_path=str(hosts_path),
        tags_file_path=str(tags_path),
        require_admin=False
    )
    hostctl = HostCtl(config)
    hostctl.backups.clock = clock
    return hostctl

import shutil
from pathlib import Path

import pytest

STATIC = Path(__file__).parent / "static"


@pytest.fixture
def static_dir():
    return STATIC


@pytest.fixture
def tmp_proc(tmp_path):
    """A fake /proc holding the fixture tables under net/."""
    net = tmp_path / "net"
    net.mkdir()
    for src, dst in [("linux_tcp_4", "tcp"), ("linux_tcp_6", "tcp6"),
                     ("linux_udp_4", "udp"), ("linux_udp_6", "udp6")]:
        shutil.copy(STATIC / src, net / dst)
    return tmp_path

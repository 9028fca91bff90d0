"""
过滤与排序测试
"""

from hostctl.config import ListOptions, SortKey
from hostctl.listing import INVALID_IP_KEY, build_rows, ip_sort_key, list_rows, sort_rows
from hostctl.models import HostEntry, Row
from hostctl.tags import TagSet


def _entries(*fields):
    return [(HostEntry(ip, host, comment), f"{ip} {host}") for ip, host, comment in fields]


def _hosts(rows):
    return [r.host for r in rows]


class TestIpSortKey:
    """IP 排序键"""

    def test_ipv4_is_mapped_into_ipv6(self):
        assert ip_sort_key("10.0.0.1") == bytes(10) + b"\xff\xff" + bytes([10, 0, 0, 1])

    def test_ipv6_is_packed(self):
        assert ip_sort_key("::1") == bytes(15) + b"\x01"

    def test_invalid_is_max(self):
        assert ip_sort_key("nonsense") == INVALID_IP_KEY
        assert ip_sort_key("nonsense") > ip_sort_key("ffff::1")

    def test_order_across_families(self):
        keys = [ip_sort_key(ip) for ip in ("::1", "10.0.0.1", "192.168.0.1", "2001:db8::1", "bad")]
        assert keys == sorted(keys)


# ---------------------------------------------------------------------------
# 过滤
# ---------------------------------------------------------------------------

def test_tag_filter_is_exact_and_case_insensitive():
    tag_set = TagSet.from_dict({"a.lan": ["Web"], "b.lan": ["webserver"], "c.lan": []})
    entries = _entries(("1.1.1.1", "a.lan", ""), ("1.1.1.2", "B.LAN", ""), ("1.1.1.3", "c.lan", ""))

    rows = build_rows(entries, tag_set, ListOptions(tag="web"))

    assert _hosts(rows) == ["a.lan"]
    assert rows[0].tags == ("Web",)


def test_rows_carry_sorted_tags_and_comment():
    tag_set = TagSet.from_dict({"a.lan": ["web", "Dev", "api"]})
    rows = build_rows(_entries(("1.1.1.1", "A.lan", "note")), tag_set, ListOptions())
    assert rows == [Row(ip="1.1.1.1", host="A.lan", tags=("api", "Dev", "web"), comment="note")]


def test_show_all_has_no_effect_on_parsed_rows():
    entries = _entries(("1.1.1.1", "a.lan", ""), ("1.1.1.2", "b.lan", ""))
    plain = build_rows(entries, TagSet(), ListOptions())
    shown = build_rows(entries, TagSet(), ListOptions(show_all=True))
    assert plain == shown


# ---------------------------------------------------------------------------
# 排序
# ---------------------------------------------------------------------------

ROWS = [
    Row("bogus", "zeta.lan", ("b",)),
    Row("192.168.0.1", "Example.com", ()),
    Row("10.0.0.1", "example.org", ("a", "z")),
    Row("10.0.0.1", "alpha.lan", ("B",)),
]


def test_sort_by_ip_then_host():
    assert _hosts(sort_rows(ROWS, SortKey.IP)) == ["alpha.lan", "example.org", "Example.com", "zeta.lan"]


def test_sort_by_name_case_insensitive():
    assert _hosts(sort_rows(ROWS, SortKey.NAME)) == ["alpha.lan", "Example.com", "example.org", "zeta.lan"]


def test_sort_by_tag_untagged_first():
    assert _hosts(sort_rows(ROWS, SortKey.TAG)) == ["Example.com", "example.org", "alpha.lan", "zeta.lan"]


def test_sort_none_keeps_file_order():
    assert sort_rows(ROWS, None) == ROWS


def test_desc_reverses_final_order():
    ascending = sort_rows(ROWS, SortKey.IP)
    assert sort_rows(ROWS, SortKey.IP, desc=True) == list(reversed(ascending))
    assert sort_rows(ROWS, None, desc=True) == list(reversed(ROWS))


def test_list_rows_uses_options():
    entries = _entries(("10.0.0.2", "b.lan", ""), ("10.0.0.1", "a.lan", ""))
    options = ListOptions.from_raw(sort="IP", desc=True)
    assert _hosts(list_rows(entries, TagSet(), options)) == ["b.lan", "a.lan"]

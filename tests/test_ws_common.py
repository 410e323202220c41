import ipaddress

import pytest

from trackerkit.ws.common import InMessageMeta, IpVersion, OutMessageMeta


@pytest.mark.parametrize(
    "ip, expected",
    [
        ("127.0.0.1", IpVersion.V4),
        ("::ffff:127.0.0.1", IpVersion.V4),
        ("::1", IpVersion.V6),
        ("2001:db8::1", IpVersion.V6),
    ],
)
def test_canonical_from_ip(ip, expected):
    assert IpVersion.canonical_from_ip(ip) is expected
    assert IpVersion.canonical_from_ip(ipaddress.ip_address(ip)) is expected


def test_canonical_from_ip_rejects_garbage():
    with pytest.raises(ValueError):
        IpVersion.canonical_from_ip("not an ip")


def test_out_meta_from_in_meta():
    meta = InMessageMeta(
        out_message_consumer_id=3,
        connection_id=42,
        ip_version=IpVersion.V6,
        pending_scrape_id=7,
    )
    out = OutMessageMeta.from_in_meta(meta)
    assert out == OutMessageMeta(3, 42, 7)


def test_out_meta_without_pending_scrape():
    meta = InMessageMeta(1, 9, IpVersion.V4)
    assert OutMessageMeta.from_in_meta(meta).pending_scrape_id is None
    assert OutMessageMeta.from_in_meta(meta).connection_id == 9


@pytest.mark.parametrize("bad", [256, -1])
def test_consumer_id_must_fit_u8(bad):
    with pytest.raises(ValueError):
        InMessageMeta(bad, 1, IpVersion.V4)
    with pytest.raises(ValueError):
        OutMessageMeta(0, 1, bad)
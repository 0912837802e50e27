import httpx
import pytest

from conftest import make_client
from models import SourceDescriptor
from scrapers.rss_scraper import fetch_rss_candidates, parse_rss_candidates

FEED_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
<channel>
    <title>Panoramas</title>
    <link>https://santiagosecreto.com</link>
    <description>Panoramas en Santiago</description>
    <item>
        <title>Festival de cine al aire libre</title>
        <link>https://santiagosecreto.com/festival-cine</link>
        <description><![CDATA[<p>Funciones <b>gratuitas</b> todo el fin de semana.</p>]]></description>
        <pubDate>Sat, 15 Jan 2099 20:00:00 +0000</pubDate>
        <content:encoded><![CDATA[<p>Intro</p><img src="https://img.cl/cine.jpg"><img src="https://img.cl/otra.jpg">]]></content:encoded>
    </item>
    <item>
        <title>Item sin enlace</title>
        <description>No debería aparecer.</description>
    </item>
    <item>
        <title>Feria antigua</title>
        <link>https://santiagosecreto.com/feria</link>
        <description>Feria de antigüedades.</description>
        <pubDate>Mon, 01 Jan 2001 00:00:00 +0000</pubDate>
    </item>
</channel>
</rss>
'''


def test_parse_items_into_candidates():
    candidates = parse_rss_candidates(FEED_XML)

    assert [c.name for c in candidates] == ["Festival de cine al aire libre", "Feria antigua"]

    festival = candidates[0]
    assert festival.sourceUrl == "https://santiagosecreto.com/festival-cine"
    assert festival.description == "Funciones gratuitas todo el fin de semana...."
    assert festival.rawDate == "Sat, 15 Jan 2099 20:00:00 +0000"
    assert festival.imageUrl == "https://img.cl/cine.jpg"

    feria = candidates[1]
    assert feria.imageUrl is None
    assert feria.rawDate == "Mon, 01 Jan 2001 00:00:00 +0000"


def test_parse_garbage_yields_nothing():
    assert parse_rss_candidates("this is not a feed") == []


@pytest.mark.asyncio
async def test_fetch_feed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=FEED_XML, headers={"Content-Type": "application/rss+xml"})

    source = SourceDescriptor(name="Santiago Secreto (RSS)", kind="rss", url="https://santiagosecreto.com/feed/", city="Santiago")
    async with make_client(handler) as client:
        candidates = await fetch_rss_candidates(client, source)

    assert len(candidates) == 2

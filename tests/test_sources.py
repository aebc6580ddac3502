from daily_ai_news.sources import NEWS_SOURCES, UNKNOWN_SOURCE, resolve_source_name


def test_known_endpoints_map_to_display_names():
    assert resolve_source_name("https://36kr.com/feed/cat-all-ai") == "36Kr"
    assert resolve_source_name("https://www.jiqizhixin.com/rss") == "机器之心"
    assert resolve_source_name("http://export.arxiv.org/rss/cs.AI") == "arXiv"


def test_unknown_endpoint_falls_back_to_host_without_www():
    assert resolve_source_name("https://www.example.com/feed.xml") == "example.com"
    assert resolve_source_name("https://blog.example.org/rss") == "blog.example.org"


def test_unparseable_endpoint_is_unknown_source():
    assert resolve_source_name("not a url") == UNKNOWN_SOURCE
    assert resolve_source_name("") == UNKNOWN_SOURCE


def test_every_default_source_has_a_display_name():
    for source in NEWS_SOURCES:
        assert resolve_source_name(source.endpoint) != UNKNOWN_SOURCE

"""End-to-end extraction over realistic pages."""
import math

import pytest

from tsdextractor import extract
from tsdextractor.config import ExtractorConfig
from tsdextractor.extractor.density import calc_sbdi, calc_text_density, node_score
from tsdextractor.extractor.normalizer import normalize
from tsdextractor.models.density import NodeInfo
from tsdextractor.parser.html_parser import find_body, iter_nodes, parse_html

NEWS_PAGE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="utf-8">
<meta name="keywords" content="轨道交通,地铁,通勤">
<title>城市轨道交通新线路正式开通_某某新闻网</title>
<link rel="stylesheet" href="/static/site.css">
<script src="/static/app.js"></script>
</head>
<body>
<div class="top-nav"><a href="/">首页</a><a href="/news">新闻</a><a href="/tech">科技</a></div>
<div class="container">
  <h1>城市轨道交通新线路正式开通</h1>
  <div class="info"><span>作者：李明</span><span>2024年3月1日 10:30</span></div>
  <div class="article-body">
    <p>3月1日上午，城市轨道交通新线路正式开通运营，全长约三十二公里，共设车站二十四座，连接城市东西两大片区。</p>
    <p>据介绍，新线路采用全自动驾驶技术，最高运行速度每小时一百公里，高峰时段发车间隔缩短至两分三十秒。</p>
    <p>市民王女士表示：“以前上班要换乘两次，现在一趟就能到，通勤时间节省了将近半个小时。”</p>
    <p>交通部门负责人称，下一步将继续优化公交接驳线路，方便沿线居民出行。</p>
    <p><img src="/images/metro.jpg"></p>
  </div>
  <div class="sidebar">
    <ul>
      <li><a href="/1">热门新闻一</a></li>
      <li><a href="/2">热门新闻二</a></li>
      <li><a href="/3">热门新闻三</a></li>
      <li><a href="/4">热门新闻四</a></li>
    </ul>
  </div>
  <div class="comment-list"><p>网友评论：很方便！</p></div>
  <div class="copyright">版权所有 某某新闻网</div>
</div>
<!-- page generated by cms -->
</body>
</html>
"""

BLOG_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta property="og:title" content="Understanding Python Generators">
<meta property="og:site_name" content="Dev Notes">
<meta name="twitter:card" content="summary">
<title>Understanding Python Generators | Dev Notes</title>
</head>
<body>
<nav><a href="/">Home</a><a href="/archive">Archive</a><a href="/about">About</a></nav>
<div class="post">
  <div class="post-meta">By <a rel="author" href="/u/jd">Jane Doe</a> on <time datetime="2023-06-15">June 15, 2023</time></div>
  <div class="post-content">
    <p>Generators let a function produce a sequence of values lazily, one at a time, instead of building the whole list in memory first.</p>
    <p>A generator function looks like any other function, except that it uses yield where you would normally return a value.</p>
    <p>Each call to next resumes the function right after the last yield, with all of its local state intact.</p>
    <p>Because values are computed on demand, generators work well for large files, network streams and infinite sequences.</p>
    <p>Chaining small generators together gives you a readable pipeline, where each stage does exactly one thing.</p>
    <figure><img src="/img/hero.jpg"><figcaption>A generator pipeline.</figcaption></figure>
    <picture><source srcset="/img/alt.webp"><img src="/img/alt.jpg"></picture>
  </div>
  <div class="related-posts">
    <h3>Keep reading</h3>
    <ul>
      <li><a href="/p/1">Iterators explained</a></li>
      <li><a href="/p/2">Async generators</a></li>
    </ul>
  </div>
</div>
<div class="site-footer"><a href="/rss">RSS</a> Dev Notes</div>
</body>
</html>
"""


def test_news_page():
    article = extract(NEWS_PAGE)

    assert article.title == "城市轨道交通新线路正式开通"
    assert article.author == "李明"
    assert article.publish_time == "2024年3月1日 10:30"
    assert article.content.startswith("3月1日上午，城市轨道交通新线路正式开通运营")
    assert "“以前上班要换乘两次" in article.content
    assert "热门新闻" not in article.content
    assert "网友评论" not in article.content
    assert "版权所有" not in article.content
    assert article.images == ["/images/metro.jpg"]


def test_news_page_in_legacy_encoding():
    page = NEWS_PAGE.replace('charset="utf-8"', 'charset="gbk"').encode("gbk")

    article = extract(page)

    assert article.title == "城市轨道交通新线路正式开通"
    assert article.content.startswith("3月1日上午")


def test_blog_page():
    article = extract(BLOG_PAGE)

    assert article.title == "Understanding Python Generators"
    assert article.author == "Jane Doe"
    assert article.publish_time == "2023-06-15"
    assert article.content.startswith("Generators let a function produce")
    assert "A generator pipeline." in article.content
    assert "Iterators explained" not in article.content
    assert "Archive" not in article.content
    # <picture> is stripped during normalization
    assert article.images == ["/img/hero.jpg"]
    assert article.content_html.lstrip().startswith("<p>Generators")


def test_debug_run_matches_normal_run():
    normal = extract(BLOG_PAGE)
    debug = extract(BLOG_PAGE, ExtractorConfig(debug=True, compute_density_std=True))
    assert debug == normal


@pytest.mark.parametrize("page", [NEWS_PAGE, BLOG_PAGE])
def test_every_node_scores_finite(page):
    body = find_body(parse_html(page))
    normalize(body)

    for node in iter_nodes(body):
        density = calc_text_density(node)
        info = NodeInfo(density=density, node=node, sbdi=calc_sbdi(density),
                        paragraph_tag_count=density.pi)
        assert density.density >= 0
        assert info.sbdi != 0
        assert math.isfinite(node_score(info))

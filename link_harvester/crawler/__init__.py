"""
Per-site crawl engine: link classification, deduplication, politeness and traversal.
"""
from link_harvester.crawler.classifier import is_in_domain, is_valid_link
from link_harvester.crawler.collector import Collector
from link_harvester.crawler.governor import PolitenessGovernor
from link_harvester.crawler.models import CrawlResult, CrawlState, PageData, SiteIdentity
from link_harvester.crawler.sink import OutputSink
from link_harvester.crawler.site_crawler import SiteCrawler
from link_harvester.crawler.visited import VisitedSet, normalize_url

__all__ = [
    "Collector",
    "CrawlResult",
    "CrawlState",
    "OutputSink",
    "PageData",
    "PolitenessGovernor",
    "SiteCrawler",
    "SiteIdentity",
    "VisitedSet",
    "is_in_domain",
    "is_valid_link",
    "normalize_url",
]

"""HTML scraper for HUD Home Store search results."""

from __future__ import annotations

import logging
from typing import List

import requests
from bs4 import BeautifulSoup

from .errors import ScrapeError
from .models import Listing

logger = logging.getLogger(__name__)

HUD_SEARCH_URL = (
    "https://www.hudhomestore.com/Listing/PropertySearchResult.aspx"
    "?pageId=1&zipCode=&city=&county=&sState=GA&fromPrice=0&toPrice=0"
    "&fCaseNumber=&bed=0&bath=0&street=&buyerType=0&specialProgram=&Status=0"
    "&indoorAmenities=&outdoorAmenities=&housingType=&stories=&parking="
    "&propertyAge=&OrderbyName=SCASENUMBER&OrderbyValue=ASC&sPageSize=100"
    "&sLanguage=ENGLISH"
)
ROW_CLASS = "FormTableRow"
MAX_COLUMNS = 9
MIN_COLUMNS = 3
# The site serves a stripped page to browser-like agents.
USER_AGENT = "curl/7.54.0"


def scrape_listings(
    target_url: str = HUD_SEARCH_URL,
    timeout: int = 30,
    session: requests.Session | None = None,
) -> List[Listing]:
    """Fetch ``target_url`` and return every listing row found on it."""
    http = session or requests
    logger.debug("Fetching listing page %s", target_url)
    try:
        response = http.get(target_url,
                            headers={"User-Agent": USER_AGENT},
                            timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ScrapeError(f"Failed to fetch {target_url}: {exc}") from exc

    if not response.encoding or response.encoding.lower() == "iso-8859-1":
        response.encoding = response.apparent_encoding or "utf-8"

    listings = parse_listings(response.text)
    logger.info("Scraped %d listings from %s", len(listings), target_url)
    return listings


def parse_listings(html_text: str) -> List[Listing]:
    soup = BeautifulSoup(html_text, "html.parser")
    listings: List[Listing] = []
    for row in soup.find_all(class_=ROW_CLASS):
        columns = tuple(
            _clean_cell(cell.get_text())
            for cell in row.find_all("td")[:MAX_COLUMNS])
        if len(columns) < MIN_COLUMNS:
            logger.warning("Skipping listing row with %d cells: %r",
                           len(columns), columns)
            continue
        listings.append(Listing(columns=columns))
    return listings


def _clean_cell(text: str) -> str:
    return text.replace("\t", "").replace("\r", "").replace("\n", " ").strip()

"""Pytest configuration and shared fixtures."""

from typing import Dict, List, Optional

import pytest

from catalog_scraper.core.exceptions import ScraperError
from catalog_scraper.scrapers.adapters.zooart import create_zooart_extractor
from catalog_scraper.scrapers.base import (
    BasePageFetcher,
    CategoryLink,
    ProductPageSnapshot,
)
from catalog_scraper.services.catalog_pipeline import PipelineOptions
from catalog_scraper.services.translation_service import (
    BaseTranslator,
    TranslationResult,
)
from catalog_scraper.storage.json_storage import BatchStorage


SITE_ORIGIN = "https://zooart.com.pl"

PRODUCT_URL = "https://zooart.com.pl/pol_pm_Brit-Premium-By-Nature-Adult-Large-15kg-123.html"

PRODUCT_HTML = """
<html>
<body>
  <h1>
    Brit Premium By Nature Adult Large 15kg
  </h1>
  <div class="producer"><a class="brand" href="/firm-pol-1-Brit.html"> Brit </a></div>
  <div class="code">Kod produktu: <strong>8595602526512</strong></div>
  <div class="series">Seria: <a href="/ser-pol-5.html">Premium By Nature</a></div>
  <div class="projector_description">
    <ul><li>Karma dla dorosłych psów dużych ras</li></ul>
  </div>
  <div class="projector_longdescription">
    <p>BRIT Premium By Nature to pełnoporcjowa karma.</p>
    <p>Skład: kurczak 40%, pszenica</p>
  </div>
  <form id="projector_form">
    <input type="hidden" name="product" value="12345">
    <span id="projector_price_srp">229,99 zł</span>
    <span id="unit_converted_price">11,33 zł/kg</span>
    <div id="projector_status"><div> Produkt dostępny </div></div>
    <div id="projector_delivery_days"> Wysyłka w 24h </div>
    <span id="projector_points_recive_points">170 pkt.</span>
    <div class="sizes">
      <a class="select_button" data-type="uniw" data-price="169,99"> 15 kg </a>
      <a class="select_button" data-type="uniw" data-price="59,99"> 3 kg </a>
    </div>
  </form>
  <div class="label_icons"><span>Promocja</span><span>Nowość</span><span>Promocja</span></div>
  <div id="projector_main_photo"><a href="/hpeciai/main/pol_pl_main.jpg">photo</a></div>
  <div id="bx-pager">
    <img data-zoom-image="/hpeciai/1/pol_pl_1.jpg" src="/small/1.jpg">
    <img data-zoom-image="/hpeciai/2/pol_pl_2.jpg" src="/small/2.jpg">
  </div>
</body>
</html>
"""

MINIMAL_PRODUCT_HTML = """
<html>
<body>
  <h1>Karma testowa</h1>
  <form id="projector_form"></form>
  <div id="projector_main_photo"><a href="/hpeciai/main/only.jpg">photo</a></div>
</body>
</html>
"""

CATEGORY_HTML = """
<html>
<body>
  <div id="search">
    <div class="product_wrapper">
      <a class="product-name" href="/pol_pm_Brit-Adult-Large-15kg-1.html"> Brit Adult Large 15kg </a>
    </div>
    <div class="product_wrapper">
      <a class="product-name" href="https://zooart.com.pl/pol_pm_Brit-Puppy-3kg-2.html">Brit Puppy 3kg</a>
    </div>
    <div class="product_wrapper">
      <a class="product-name">No link</a>
    </div>
  </div>
  <a class="product-name" href="/outside-search.html">Not a listing link</a>
</body>
</html>
"""


class FakePageFetcher(BasePageFetcher):
    """In-memory fetcher serving prepared HTML per URL.

    URLs listed in ``failing`` raise ScraperError, as a navigation timeout
    would.
    """

    shop_slug = "fake"
    shop_name = "Fake"

    def __init__(
        self,
        links: List[CategoryLink],
        pages: Dict[str, str],
        failing: Optional[Dict[str, str]] = None,
        category_error: Optional[Exception] = None,
    ):
        super().__init__()
        self.links = links
        self.pages = pages
        self.failing = failing or {}
        self.category_error = category_error
        self.requested: List[str] = []
        self.cleaned_up = False

    async def fetch_category_links(self, url: str) -> List[CategoryLink]:
        if self.category_error is not None:
            raise self.category_error
        return list(self.links)

    async def fetch_product_page(self, url: str) -> ProductPageSnapshot:
        self.requested.append(url)
        if url in self.failing:
            raise ScraperError(self.shop_name, self.failing[url])
        return ProductPageSnapshot(url=url, html=self.pages[url])

    async def cleanup(self) -> None:
        self.cleaned_up = True


class FakeTranslator(BaseTranslator):
    """Translator returning a fixed result or raising a prepared error."""

    def __init__(
        self,
        result: Optional[TranslationResult] = None,
        error: Optional[Exception] = None,
    ):
        self.result = result or TranslationResult(
            short_description="Täissööt suurt tõugu koertele",
            long_description="BRIT Premium By Nature on täisväärtuslik kuivtoit.",
        )
        self.error = error
        self.calls = []
        self.closed = False

    async def translate(self, short_text: str, long_text: str) -> TranslationResult:
        self.calls.append((short_text, long_text))
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def extractor():
    """ProductExtractor configured with the ZooArt selectors."""
    return create_zooart_extractor(SITE_ORIGIN)


@pytest.fixture
def product_snapshot() -> ProductPageSnapshot:
    return ProductPageSnapshot(url=PRODUCT_URL, html=PRODUCT_HTML)


@pytest.fixture
def storage(tmp_path) -> BatchStorage:
    return BatchStorage(tmp_path / "scraped", "zooart")


@pytest.fixture
def options() -> PipelineOptions:
    """Options with translation marker on and the Brit title fix enabled."""
    return PipelineOptions(
        rate=0.23,
        margin_fraction=0.10,
        testing=False,
        brit_food_title_fix=True,
        brand_guard="brit",
        delay_min=2.0,
        delay_max=4.0,
        translation_failure_marker=" (Translation Failed)",
    )

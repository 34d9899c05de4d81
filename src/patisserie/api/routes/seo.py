"""``/sitemap.xml`` and ``/robots.txt`` for search engines."""

from xml.sax.saxutils import escape

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from protean.utils.globals import current_domain

from patisserie.category.category import Category
from patisserie.config import setting
from patisserie.product.product import Product
from patisserie.utils.clock import as_utc

router = APIRouter(tags=["seo"])

STATIC_PAGES = [
    ("/", "daily", "1.0"),
    ("/products", "daily", "0.9"),
    ("/contact", "monthly", "0.5"),
    ("/newsletter", "monthly", "0.4"),
]


def _site_url() -> str:
    return setting("SITE_URL", "https://lapatisserie.shop").rstrip("/")


def _url(loc: str, changefreq: str, priority: str, lastmod=None) -> str:
    parts = [f"<loc>{escape(loc)}</loc>"]
    if lastmod is not None:
        parts.append(f"<lastmod>{as_utc(lastmod).date().isoformat()}</lastmod>")
    parts.append(f"<changefreq>{changefreq}</changefreq>")
    parts.append(f"<priority>{priority}</priority>")
    return "  <url>" + "".join(parts) + "</url>"


def build_sitemap() -> str:
    base = _site_url()
    urls = [_url(f"{base}{path}", freq, priority) for path, freq, priority in STATIC_PAGES]

    categories = (
        current_domain.repository_for(Category)._dao.query.filter(is_active=True).limit(None).all().items
    )
    for category in categories:
        urls.append(_url(f"{base}/products?category={category.id}", "weekly", "0.8", category.updated_at))

    products = current_domain.repository_for(Product)._dao.query.filter(is_active=True).limit(None).all().items
    for product in products:
        urls.append(_url(f"{base}/product/{product.id}", "weekly", "0.7", product.updated_at))

    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            *urls,
            "</urlset>",
        ]
    )


@router.get("/sitemap.xml")
async def sitemap():
    return Response(content=build_sitemap(), media_type="application/xml")


@router.get("/robots.txt")
async def robots():
    return PlainTextResponse(f"User-agent: *\nAllow: /\n\nSitemap: {_site_url()}/sitemap.xml\n")

"""Launch the catalog browser against the Art Institute of Chicago API."""

from catalog_browser import BrowserConfig, explore
from catalog_browser.config import configure_logging

config = BrowserConfig.from_env()
configure_logging(config.log_level)

print(f"Catalog: {config.base_url} ({config.page_size} records per page)")
print("Launching browser...")

explore(page_size=config.page_size)

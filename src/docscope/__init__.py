"""
docscope - Extract the documentation for one function or method from an
API reference page.

Usage:
    from docscope import DocExtractor, DocscopeConfig

    async with DocExtractor(DocscopeConfig()) as extractor:
        result = await extractor.extract("https://docs.example.com/api", "createUser")
        print(result.content)

    # or, without an event loop
    from docscope import extract_blocking

    print(extract_blocking("https://docs.example.com/api", "createUser").content)
"""

__version__ = "1.0.0"

from .core.extractor import DocExtractor, PassState, extract_blocking, extract_documentation
from .errors import ExtractionError, FetchError, InvalidURL, NoContentExtracted, SymbolNotFound
from .models.config import CrawlConfig, DocscopeConfig, ExtractionConfig, NetworkConfig
from .models.result import ExtractionResult, PassName

__all__ = [
    "__version__",
    # Core
    "DocExtractor",
    "PassState",
    "extract_blocking",
    "extract_documentation",
    # Config
    "DocscopeConfig",
    "NetworkConfig",
    "CrawlConfig",
    "ExtractionConfig",
    # Results
    "ExtractionResult",
    "PassName",
    # Errors
    "ExtractionError",
    "InvalidURL",
    "FetchError",
    "SymbolNotFound",
    "NoContentExtracted",
]

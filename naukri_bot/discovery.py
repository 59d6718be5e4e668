"""
Heuristic job-listing discovery.

Result markup is not known in advance, so listings are found by content
heuristics evaluated inside the page. The heuristic itself is a pluggable
classifier; ListingDiscovery only handles settling, diagnostics and the final
keyword guarantee.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from naukri_bot.models import ListingCandidate
from tools.logger import get_logger, save_debug_artifact
from tools.waits import Waiter

logger = get_logger("Discovery")

# Shared in-page helper: turns an element into a plain record.
_DESCRIBE_JS = r"""
const getText = (el) => el.textContent || el.innerText || "";
const describe = (el, selector, index, keywords, excerptLength) => {
    const text = getText(el);
    const classes = typeof el.className === "string" ? el.className : (el.getAttribute("class") || "");
    return {
        text: text.trim().slice(0, excerptLength),
        matched: keywords.filter(k => text.includes(k)),
        classes: classes,
        selector: selector,
        index: index,
        id: el.id || "",
    };
};
const exactClassSelector = (el) => {
    const classes = el.getAttribute("class") || "";
    return `div[class="${classes.replace(/\\/g, "\\\\").replace(/"/g, '\\"')}"]`;
};
"""

MARKER_SCRIPT = "({classMarkers, keywords, excerptLength}) => {" + _DESCRIBE_JS + r"""
    const structural = classMarkers.map(m => `div[class*="${m}"]`).join(", ");
    const possible = Array.from(document.querySelectorAll(structural));
    const likely = possible.filter(el => {
        const text = getText(el);
        return keywords.some(k => text.includes(k));
    });
    return likely.map(el => {
        const selector = exactClassSelector(el);
        const index = Array.from(document.querySelectorAll(selector)).indexOf(el);
        return describe(el, selector, Math.max(index, 0), keywords, excerptLength);
    });
}"""

SELECTOR_SCRIPT = "({selectors, keywords, excerptLength}) => {" + _DESCRIBE_JS + r"""
    for (const selector of selectors) {
        const elements = Array.from(document.querySelectorAll(selector));
        if (elements.length > 0) {
            return elements.map((el, i) => describe(el, selector, i, keywords, excerptLength));
        }
    }
    return [];
}"""

KNOWN_LISTING_SELECTORS = [
    "article.jobTuple",
    ".job-listing",
    ".jobTupleHeader",
    "[data-job-id]",
    ".job-card",
]


class ListingClassifier(ABC):
    """Strategy: given the live page, return the elements that look like job listings."""

    name = "base"

    def __init__(self, keywords: Sequence[str], excerpt_length: int = 100):
        self.keywords = list(keywords)
        self.excerpt_length = excerpt_length

    @abstractmethod
    async def classify(self, driver) -> List[ListingCandidate]:
        pass

    def matched_keywords(self, record: dict) -> List[str]:
        """Semantic half of the filter: which configured keywords the element's text carries."""
        reported = record.get("matched") or ()
        text = record.get("text") or ""
        return [k for k in self.keywords if k in reported or k in text]

    def to_candidates(self, records) -> List[ListingCandidate]:
        candidates = []
        for record in records or []:
            matched = self.matched_keywords(record)
            if not matched:
                continue
            candidates.append(ListingCandidate.from_record(dict(record, matched=matched), self.excerpt_length))
        return candidates


class MarkerListingClassifier(ListingClassifier):
    """div whose class contains a job marker AND whose text contains a domain keyword."""

    name = "markers"

    def __init__(self, class_markers: Sequence[str], keywords: Sequence[str], excerpt_length: int = 100):
        super().__init__(keywords, excerpt_length)
        self.class_markers = list(class_markers)

    async def classify(self, driver) -> List[ListingCandidate]:
        records = await driver.evaluate(MARKER_SCRIPT, {
            "classMarkers": self.class_markers,
            "keywords": self.keywords,
            "excerptLength": self.excerpt_length,
        })
        return self.to_candidates(records)


class SelectorListingClassifier(ListingClassifier):
    """First known listing selector that matches anything wins."""

    name = "selectors"

    def __init__(self, keywords: Sequence[str], selectors: Sequence[str] = None, excerpt_length: int = 100):
        super().__init__(keywords, excerpt_length)
        self.selectors = list(selectors or KNOWN_LISTING_SELECTORS)

    async def classify(self, driver) -> List[ListingCandidate]:
        records = await driver.evaluate(SELECTOR_SCRIPT, {
            "selectors": self.selectors,
            "keywords": self.keywords,
            "excerptLength": self.excerpt_length,
        })
        return self.to_candidates(records)


class FallbackListingClassifier(ListingClassifier):
    """Runs classifiers in order and returns the first non-empty result."""

    name = "fallback"

    def __init__(self, classifiers: Sequence[ListingClassifier]):
        super().__init__(dict.fromkeys(k for c in classifiers for k in c.keywords))
        self.classifiers = list(classifiers)

    async def classify(self, driver) -> List[ListingCandidate]:
        for classifier in self.classifiers:
            candidates = await classifier.classify(driver)
            if candidates:
                logger.debug(f"{classifier.name} classifier matched {len(candidates)} listings")
                return candidates
        return []


def build_classifier(config) -> ListingClassifier:
    markers = MarkerListingClassifier(config.listing_class_markers, config.listing_keywords,
                                      config.excerpt_length)
    if config.discovery_strategy == "markers":
        return markers
    selectors = SelectorListingClassifier(config.listing_keywords, excerpt_length=config.excerpt_length)
    if config.discovery_strategy == "selectors":
        return selectors
    return FallbackListingClassifier([selectors, markers])


class ListingDiscovery:
    """Finds candidate listings on the current page. Never navigates."""

    def __init__(self, driver, classifier: ListingClassifier, waiter: Waiter = None,
                 settle_timeout_ms: int = 5000, diagnostic_length: int = 1000):
        self.driver = driver
        self.classifier = classifier
        self.waiter = waiter or Waiter()
        self.settle_timeout_ms = settle_timeout_ms
        self.diagnostic_length = diagnostic_length

    async def discover(self) -> List[ListingCandidate]:
        logger.info("Attempting to find job listings...")

        async def listings_rendered():
            return bool(await self.classifier.classify(self.driver))

        # settle: listings render asynchronously after navigation
        await self.waiter.until(listings_rendered, timeout=self.settle_timeout_ms / 1000,
                                label="job listings")

        logger.info(f"Current URL: {await self.driver.current_url()}")
        candidates = await self.classifier.classify(self.driver)
        candidates = [c for c in candidates if c.matched_keywords]

        logger.info(f"Found {len(candidates)} potential job listings")
        for i, c in enumerate(candidates, 1):
            logger.debug(f"  {i}. {c.describe()} | {c.text!r}")

        if not candidates:
            await self._dump_diagnostics()
        return candidates

    async def _dump_diagnostics(self):
        logger.warning("No job listings found. Dumping page content...")
        try:
            content = await self.driver.content()
            logger.debug(content[:self.diagnostic_length])
        except Exception as e:
            logger.error(f"Failed to read page content: {e}")
        try:
            await save_debug_artifact(self.driver, "no_listings")
        except Exception as e:
            logger.error(f"Failed to save debug artifacts: {e}")

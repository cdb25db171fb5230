"""
In-memory stand-ins for the slice of the Playwright async API the
auditor touches. Selectors are matched by exact string.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class FakeRequest:
    url: str
    method: str = 'GET'


@dataclass
class FakeResponse:
    url: str
    status: int = 200
    method: str = 'GET'
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def request(self) -> FakeRequest:
        return FakeRequest(self.url, self.method)


@dataclass
class FakeConsoleMessage:
    type: str
    text: str


@dataclass
class FakeError:
    message: str


@dataclass
class FakeElement:
    tag: str = 'DIV'
    text: str = ''
    html: Optional[str] = None
    visible: bool = True
    enabled: bool = True
    editable: bool = True
    value: str = ''
    attrs: Dict[str, str] = field(default_factory=dict)
    box: Optional[Dict[str, float]] = None
    in_label: bool = False
    on_click: Optional[Callable[['FakePage'], None]] = None
    children: Dict[str, List['FakeElement']] = field(default_factory=dict)
    clicks: int = 0
    hovers: int = 0
    checked: bool = False

    def __post_init__(self):
        if self.html is None:
            self.html = self.text


class FakeLocator:

    def __init__(self, page: 'FakePage', selector: str, elements: List[FakeElement]):
        self.page = page
        self.selector = selector
        self.elements = elements

    def _element(self) -> FakeElement:
        if self.selector in self.page.broken_selectors:
            raise RuntimeError(f"Target closed while resolving {self.selector}")
        if not self.elements:
            raise RuntimeError(f"Timeout waiting for {self.selector}")
        return self.elements[0]

    async def count(self) -> int:
        if self.selector in self.page.broken_selectors:
            raise RuntimeError(f"Target closed while resolving {self.selector}")
        return len(self.elements)

    def nth(self, index: int) -> 'FakeLocator':
        return FakeLocator(self.page, self.selector, self.elements[index:index + 1])

    @property
    def first(self) -> 'FakeLocator':
        return self.nth(0)

    def locator(self, selector: str) -> 'FakeLocator':
        children = [child for element in self.elements for child in element.children.get(selector, [])]
        return FakeLocator(self.page, selector, children)

    async def is_visible(self) -> bool:
        return bool(self.elements) and self.elements[0].visible

    async def is_enabled(self) -> bool:
        return self._element().enabled

    async def click(self) -> None:
        element = self._element()
        element.clicks += 1
        if element.on_click:
            element.on_click(self.page)

    async def hover(self) -> None:
        self._element().hovers += 1

    async def inner_html(self) -> str:
        return self._element().html

    async def text_content(self) -> str:
        return self._element().text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._element().attrs.get(name)

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        return self._element().box

    async def fill(self, value: str) -> None:
        element = self._element()
        if element.editable:
            element.value = value

    async def input_value(self) -> str:
        return self._element().value

    async def select_option(self, index: int = 0) -> None:
        self._element().value = f"option-{index}"

    async def check(self) -> None:
        self._element().checked = True

    async def evaluate(self, expression: str) -> Any:
        element = self._element()
        if 'tagName' in expression:
            return element.tag
        if 'closest' in expression:
            return element.in_label
        return None


class FakeContext:

    def __init__(self):
        self.cookie_clears = 0

    async def clear_cookies(self) -> None:
        self.cookie_clears += 1


class FakePage:

    def __init__(self, url: str = 'about:blank'):
        self.context = FakeContext()
        self.responses: Dict[str, FakeResponse] = {}
        self.redirects: Dict[str, str] = {}
        self.unreachable = set()
        self.html = ''
        self.selectors: Dict[str, List[FakeElement]] = {}
        self.broken_selectors = set()
        self.listeners: Dict[str, List[Callable]] = {}
        self.screenshots: List[Dict[str, Any]] = []
        self.fail_screenshots = False
        self.waits: List[int] = []
        self.evaluate_result: Any = {}
        self.history: List[str] = [url]
        self.position = 0

    @property
    def url(self) -> str:
        return self.history[self.position]

    def add(self, selector: str, *elements: FakeElement) -> None:
        self.selectors.setdefault(selector, []).extend(elements)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector, self.selectors.get(selector, []))

    def on(self, event: str, handler: Callable) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        self.listeners.get(event, []).remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(payload)

    def fire_request(self, url: str, status: int = 200, method: str = 'GET') -> None:
        self.emit('request', FakeRequest(url, method))
        self.emit('response', FakeResponse(url, status, method))

    def fire_console(self, text: str, level: str = 'error') -> None:
        self.emit('console', FakeConsoleMessage(level, text))

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if self.fail_screenshots:
            raise RuntimeError("Screenshot failed: page crashed")
        self.screenshots.append({'path': path, 'full_page': full_page})
        return b''

    async def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)

    async def wait_for_load_state(self, state: str = 'load', timeout: Optional[float] = None) -> None:
        return None

    async def wait_for_url(self, url, timeout: Optional[float] = None) -> None:
        if not url.search(self.url):
            raise RuntimeError(f"Timeout {timeout}ms exceeded waiting for {url.pattern}")

    async def goto(self, url: str, **kwargs) -> Optional[FakeResponse]:
        if url in self.unreachable:
            raise RuntimeError(f"net::ERR_CONNECTION_RESET at {url}")
        self.navigate(self.redirects.get(url, url))
        return self.responses.get(url)

    def navigate(self, url: str) -> None:
        """Synchronous navigation for on_click callbacks."""
        del self.history[self.position + 1:]
        self.history.append(url)
        self.position += 1

    async def go_back(self, **kwargs) -> None:
        self.position = max(0, self.position - 1)

    async def go_forward(self, **kwargs) -> None:
        self.position = min(len(self.history) - 1, self.position + 1)

    async def content(self) -> str:
        return self.html

    async def evaluate(self, expression: str, *args) -> Any:
        return self.evaluate_result

"""Base middleware architecture for Robyn applications."""

from collections.abc import Callable, Iterable

from robyn import Request, Response, Robyn

from app.core.logger import LogIcon, logger


def _passthrough(hook: Callable) -> Callable:
    """Mark a default hook so registration can skip it."""
    hook.__passthrough__ = True  # type: ignore[attr-defined]
    return hook


def _is_passthrough(hook: Callable) -> bool:
    return getattr(hook, "__passthrough__", False)


class BaseMiddleware:
    """Base class for middlewares with before/after hooks; subclasses override at least one.

    Robyn only binds endpoint-specific hooks to GET routes, so a middleware guarding
    other methods sets ``global_hook`` and is filtered by path through ``matches``.
    """

    endpoints: frozenset[str] = frozenset()
    global_hook: bool = False

    def __init__(self, endpoints: Iterable[str] | None = None) -> None:
        if endpoints is not None:
            self.endpoints = frozenset(endpoints)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if _is_passthrough(cls.before) and _is_passthrough(cls.after):
            raise TypeError(f"{cls.__name__} must implement at least one of before/after")

    @_passthrough
    def before(self, request: Request) -> Request | Response:
        """Called before request handling. Return Request to continue or Response to short-circuit."""
        return request

    @_passthrough
    def after(self, response: Response) -> Response:
        """Called after request handling. Return modified Response."""
        return response

    @property
    def has_before(self) -> bool:
        return not _is_passthrough(type(self).before)

    @property
    def has_after(self) -> bool:
        return not _is_passthrough(type(self).after)

    def matches(self, path: str) -> bool:
        return not self.endpoints or path in self.endpoints


class MiddlewareHandler:
    """Manages middleware registration for a Robyn application."""

    def __init__(self, app: Robyn) -> None:
        self._app = app
        self._middlewares: list[BaseMiddleware] = []

    def register(self, middleware: BaseMiddleware) -> "MiddlewareHandler":
        """Register a middleware instance. Returns self for chaining."""
        self._middlewares.append(middleware)
        if middleware.global_hook:
            self._apply_global(middleware)
        else:
            self._apply_middleware(middleware)
        logger.info(f"Registered middleware: {middleware.__class__.__name__}", icon=LogIcon.ADAPTER)
        return self

    def _apply_middleware(self, middleware: BaseMiddleware) -> None:
        """Apply middleware to its endpoints, or to every route when it declares none."""
        endpoints = middleware.endpoints or self._get_all_routes()

        for endpoint in sorted(endpoints):
            if middleware.has_before:
                self._register_before(endpoint, middleware.before)
            if middleware.has_after:
                self._register_after(endpoint, middleware.after)

    def _apply_global(self, middleware: BaseMiddleware) -> None:
        """Apply the before hook to every request, scoped to the middleware's endpoints by path."""
        if middleware.has_after:
            raise TypeError(f"{middleware.__class__.__name__}: global hooks support before only")

        def scoped_before(request: Request) -> Request | Response:
            if middleware.matches(request.url.path):
                return middleware.before(request)
            return request

        self._register_before(None, scoped_before)

    def _get_all_routes(self) -> frozenset[str]:
        """Get all registered routes from the app."""
        routes = self._app.get_all_routes()
        return frozenset(route[1] for route in routes)

    def _register_before(self, endpoint: str | None, handler: Callable) -> None:
        """Register a before_request handler for an endpoint, or for every request when endpoint is None."""
        @self._app.before_request(endpoint)
        async def before_wrapper(request: Request) -> Request | Response:
            return handler(request)

    def _register_after(self, endpoint: str, handler: Callable) -> None:
        """Register an after_request handler for an endpoint."""
        @self._app.after_request(endpoint)
        def after_wrapper(response: Response) -> Response:
            return handler(response)

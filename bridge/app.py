"""Application bootstrap and lifecycle management."""

from typing import Any, Protocol

from .catalog import ReplyCatalog
from .config import Settings
from .delivery import GraphDeliveryGateway, IDeliveryGateway
from .dispatch import DispatchRouter
from .llm import ChatCompletionsProvider, CompletionDelegate, ICompletionDelegate, LLMProvider
from .logging_config import get_logger
from .models import Effect
from .normalizer import normalize_payload
from .store import ConversationStore, IConversationStore
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Forget conversations and trace events."""
        ...

    async def handle_webhook(self, payload: Any) -> list[Effect]:
        """Normalize, dispatch and deliver one webhook body."""
        ...

    @property
    def settings(self) -> Settings:
        ...

    @property
    def store(self) -> IConversationStore:
        ...

    @property
    def tracker(self) -> ITracker:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        delivery_gateway: IDeliveryGateway | None = None,
        completion_delegate: ICompletionDelegate | None = None,
        catalog: ReplyCatalog | None = None,
    ):
        self._settings = settings or Settings.from_env()

        # Injected collaborators win over the ones built from settings
        self._gateway = delivery_gateway
        self._delegate = completion_delegate
        self._catalog = catalog

        # Components (will be initialized in start())
        self._store: IConversationStore | None = None
        self._tracker: ITracker | None = None
        self._router: DispatchRouter | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Store and catalog (no dependencies)
        self._store = ConversationStore()
        if self._catalog is None:
            self._catalog = ReplyCatalog.default()

        # 2. Tracker
        self._tracker = Tracker()

        # 3. Completion delegate (optional)
        if self._delegate is None and self._settings.delegate_enabled:
            self._delegate = self._build_delegate()
            logger.info("Completion delegate initialized (%s)", self._settings.completion_provider)
        elif self._delegate is None:
            logger.warning("COMPLETION_API_KEY not set, free text gets menu prompts only")

        # 4. Delivery gateway (fails fast without PAGE_ACCESS_TOKEN)
        if self._gateway is None:
            self._gateway = GraphDeliveryGateway(
                page_access_token=self._settings.page_access_token,
                api_version=self._settings.graph_api_version,
            )
        await self._gateway.start()
        logger.info("Delivery gateway started")

        # 5. Router (depends on everything above)
        self._router = DispatchRouter(
            store=self._store,
            catalog=self._catalog,
            delegate=self._delegate,
            tracker=self._tracker,
            delegate_timeout=self._settings.completion_timeout,
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._gateway:
            await self._gateway.stop()
            logger.info("Delivery gateway stopped")
        if self._delegate:
            await self._delegate.close()

    async def reset(self) -> None:
        """Forget conversations and trace events."""
        if self._store:
            self._store.clear()
        if self._tracker:
            await self._tracker.clear()
        logger.info("Reset complete")

    async def handle_webhook(self, payload: Any) -> list[Effect]:
        """
        Normalize, dispatch and deliver one webhook body.

        Raises MalformedInputError / UnsupportedObjectError for bodies that
        must be rejected as a whole. Delivery failures are tracked, not raised.
        """
        if not self._router or not self._gateway:
            raise RuntimeError("Application not started")

        events = normalize_payload(payload, expected_object=self._settings.expected_object)
        effects = await self._router.process(events)

        for effect in effects:
            result = await self._gateway.send(effect.user_id, effect.reply)
            if not result.ok:
                await self._tracker.track(
                    "delivery_failed",
                    "delivery_gateway",
                    {"user_id": effect.user_id, "error": result.error},
                )

        return effects

    def _build_delegate(self) -> ICompletionDelegate:
        settings = self._settings
        if settings.completion_provider == "anthropic":
            provider = LLMProvider(
                api_key=settings.completion_api_key,
                model=settings.completion_model,
            )
        elif settings.completion_provider in ("openai", "deepseek"):
            provider = ChatCompletionsProvider(
                api_key=settings.completion_api_key,
                base_url=settings.completion_base_url,
                model=settings.completion_model,
            )
        else:
            raise ValueError(f"Unknown COMPLETION_PROVIDER: {settings.completion_provider!r}")

        return CompletionDelegate(provider, history_window=settings.transcript_window)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> IConversationStore:
        """Get conversation store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def tracker(self) -> ITracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def router(self) -> DispatchRouter:
        """Get dispatch router instance."""
        if not self._router:
            raise RuntimeError("Application not started")
        return self._router

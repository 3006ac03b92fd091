"""
Service Manager for the game development server
Provides lazily created, shared service instances around one Linear connection
"""
from typing import Any, Callable, Dict, Optional

from .auth import LinearAuth
from .config import Settings
from .services.filesystem import LocalFileSystem
from .services.knowledge_service import KnowledgeService
from .services.linear_client import LinearClient
from .services.pipeline import CreationPipeline
from .services.template_service import TemplateService
from .services.tracker_service import TrackerService


class ServiceManager:
    """
    Manages service instances for the server

    Features:
    - Single authentication instance shared by every Linear call
    - Lazy-loading: services created only when first accessed
    - One knowledge base per process, owned by the KnowledgeService
    - Usage statistics for monitoring

    Example:
        auth = LinearAuth()
        await auth.initialize()

        manager = ServiceManager(auth, Settings.from_env())

        # Services created on first access
        pipeline = manager.get_pipeline()

        # Subsequent calls return the same instance
        same_pipeline = manager.get_pipeline()
    """

    def __init__(
        self,
        auth: LinearAuth,
        settings: Optional[Settings] = None,
        filesystem=None,
        clock: Optional[Callable] = None
    ):
        """
        Initialize service manager

        Args:
            auth: Authenticated LinearAuth instance
            settings: Server settings (defaults to Settings())
            filesystem: Filesystem used by template generation (defaults to LocalFileSystem)
            clock: Optional clock shared by sprint planning and knowledge refresh
        """
        if not auth or not auth.client:
            raise ValueError(
                "ServiceManager requires an initialized LinearAuth instance. "
                "Call auth.initialize() before creating ServiceManager."
            )

        self.auth = auth
        self.settings = settings or Settings()
        self._filesystem = filesystem
        self._clock = clock

        self._services: Dict[str, Any] = {}

        # Statistics
        self._service_creation_count = 0
        self._cache_hit_count = 0

    def _get_or_create(self, name: str, factory: Callable[[], Any]) -> Any:
        # Return cached instance if exists
        if name in self._services:
            self._cache_hit_count += 1
            return self._services[name]

        service = factory()
        self._services[name] = service
        self._service_creation_count += 1
        return service

    def _clock_kwargs(self) -> Dict[str, Any]:
        return {"clock": self._clock} if self._clock else {}

    def get_linear_client(self) -> LinearClient:
        """Get or create the LinearClient"""
        return self._get_or_create(
            "linear_client",
            lambda: LinearClient(self.auth, api_url=self.settings.linear_api_url)
        )

    def get_tracker_service(self) -> TrackerService:
        """Get or create the TrackerService"""
        return self._get_or_create(
            "tracker_service",
            lambda: TrackerService(self.get_linear_client(), **self._clock_kwargs())
        )

    def get_template_service(self) -> TemplateService:
        """Get or create the TemplateService"""
        return self._get_or_create(
            "template_service",
            lambda: TemplateService(self._filesystem or LocalFileSystem())
        )

    def get_knowledge_service(self) -> KnowledgeService:
        """Get or create the KnowledgeService (one per process)"""
        return self._get_or_create(
            "knowledge_service",
            lambda: KnowledgeService(**self._clock_kwargs())
        )

    def get_pipeline(self) -> CreationPipeline:
        """Get or create the CreationPipeline"""
        return self._get_or_create(
            "pipeline",
            lambda: CreationPipeline(
                knowledge_service=self.get_knowledge_service(),
                tracker_service=self.get_tracker_service(),
                template_service=self.get_template_service(),
                knowledge_topics=self.settings.knowledge_topics,
            )
        )

    def get_loaded_services(self):
        """Names of services created so far, sorted"""
        return sorted(self._services)

    def clear_all_services(self) -> None:
        """
        Drop all service instances
        The knowledge base is lost with its service
        """
        self._services.clear()

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get service manager statistics

        Returns:
            Dictionary with usage statistics:
            - loaded_services: Names of service instances created
            - total_services: Number of service instances
            - service_creations: Total services created (including cleared)
            - cache_hits: Number of times a cached service was returned
            - cache_hit_rate_percent: Percentage of cache hits vs total requests
            - services: Per-service statistics
        """
        total_requests = self._service_creation_count + self._cache_hit_count
        cache_hit_rate = (
            (self._cache_hit_count / total_requests * 100)
            if total_requests > 0 else 0.0
        )

        per_service = {
            name: service.get_statistics()
            for name, service in sorted(self._services.items())
            if hasattr(service, "get_statistics")
        }

        return {
            "loaded_services": self.get_loaded_services(),
            "total_services": len(self._services),
            "service_creations": self._service_creation_count,
            "cache_hits": self._cache_hit_count,
            "cache_hit_rate_percent": round(cache_hit_rate, 2),
            "services": per_service,
        }

    def __repr__(self) -> str:
        """String representation for debugging"""
        return (
            f"ServiceManager(services={len(self._services)}, "
            f"api_url='{self.settings.linear_api_url}')"
        )

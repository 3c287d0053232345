"""
Configurator - process-wide configuration for the Orbital SDK.

Loads the properties source once per process and derives from it:
- Security providers, installed in the process-wide catalog
- XML request templates, resolved to their text
- log4j-style routing keys

The single ConfigurationManager instance is created by
ConfigurationManager.initialize(), which is serialized by a process-wide
lock and refuses to re-point an existing instance at a different source.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from orbital_sdk.config.logging_config import (
    apply_http_client_level,
    apply_log_routing,
    create_default_loggers,
    ensure_default_destination,
)
from orbital_sdk.config.settings import SDKSettings, get_settings
from orbital_sdk.core.exceptions import (
    ConfigurationConflictError,
    ConfigurationError,
    InitializationError,
    TemplateNotFoundError,
)
from orbital_sdk.core.extractor import (
    LOG_ROUTING_RULE,
    TEMPLATE_RULE,
    MalformedEntry,
    extract,
    extract_provider_ids,
    iter_matches,
)
from orbital_sdk.security.registry import SecurityProviderRegistry
from orbital_sdk.sources.properties import PropertySource
from orbital_sdk.sources.resources import ResourceNamespace, default_namespace
from orbital_sdk.templates.resolver import ResourceTemplateResolver, TemplateResolver
from orbital_sdk.utils.sanitizers import redact_properties, sanitize_log_message
from orbital_sdk.utils.validators import (
    is_logger,
    normalize_source,
    sources_match,
    validate_source_identifier,
)

HTTP_CLIENT_LOG_LEVEL_KEY = "HTTPClientLogLevel"

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class ConfigurationManager:
    """
    Singleton holding the loaded SDK configuration.

    Use ConfigurationManager.initialize() (or get_configuration_manager())
    to obtain the instance; the constructor does not load anything.
    """

    _instance: ClassVar[Optional["ConfigurationManager"]] = None
    _bound_source: ClassVar[Optional[str]] = None
    _lock: ClassVar[threading.RLock] = threading.RLock()

    def __init__(
        self,
        source: str,
        settings: SDKSettings,
        namespace: ResourceNamespace,
        property_source: PropertySource,
        provider_registry: SecurityProviderRegistry,
        template_resolver: Optional[TemplateResolver] = None,
        engine_logger: Optional[LoggerLike] = None,
        ecommerce_logger: Optional[LoggerLike] = None,
    ) -> None:
        """
        Initialize an unloaded configurator.

        Args:
            source: Normalized source identifier.
            settings: Bootstrap settings.
            namespace: Namespace for the default template resolver.
            property_source: Loader for the properties source.
            provider_registry: Registry used to install security providers.
            template_resolver: Resolver to use instead of the default one.
            engine_logger: Caller-supplied engine logger.
            ecommerce_logger: Caller-supplied eCommerce logger.
        """
        self._source = source
        self._settings = settings
        self._namespace = namespace
        self._property_source = property_source
        self._provider_registry = provider_registry
        self._template_resolver = template_resolver
        self._engine_logger = engine_logger
        self._ecommerce_logger = ecommerce_logger
        self._loggers_created_by_sdk = False
        self._configurations: Dict[str, str] = {}
        self._xml_templates: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Singleton lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def initialize(
        cls,
        source: Optional[str] = None,
        *,
        engine_logger: Optional[LoggerLike] = None,
        ecommerce_logger: Optional[LoggerLike] = None,
        settings: Optional[SDKSettings] = None,
        namespace: Optional[ResourceNamespace] = None,
        property_source: Optional[PropertySource] = None,
        template_resolver: Optional[TemplateResolver] = None,
        provider_registry: Optional[SecurityProviderRegistry] = None,
    ) -> "ConfigurationManager":
        """
        Get the configurator, loading it on first use.

        Args:
            source: Resource identifier of the properties source. Defaults to
                the previously bound source, then ``settings.config_source``.
            engine_logger: Logger for engine messages (pass both or neither).
            ecommerce_logger: Logger for transaction messages.
            settings: Bootstrap settings (defaults to get_settings()).
            namespace: Resource namespace for properties and templates.
            property_source: Loader replacing the default PropertySource.
            template_resolver: Resolver replacing the default resolver.
            provider_registry: Registry replacing the default registry.

        Returns:
            The process-wide ConfigurationManager.

        Raises:
            ConfigurationError: Invalid source or logger arguments, or an
                empty, missing or unreadable properties source.
            ConfigurationConflictError: An instance bound to a different
                source already exists.
            ProviderRegistrationError: A declared provider cannot be installed.
            InitializationError: A declared template cannot be loaded.
        """
        if (engine_logger is None) != (ecommerce_logger is None) or (
            engine_logger is not None
            and not (is_logger(engine_logger) and is_logger(ecommerce_logger))
        ):
            raise ConfigurationError(
                "Exception while initializing the configurator - "
                "Invalid logger object provided"
            )

        if source is not None:
            validate_source_identifier(source)

        with cls._lock:
            existing = cls._instance
            if existing is not None:
                if source is not None and not sources_match(source, existing.source):
                    raise ConfigurationConflictError(
                        "A singleton configurator is already initialized "
                        f"with the following [{existing.source}]",
                        bound_source=existing.source,
                        requested_source=source,
                    )
                return existing

            settings = settings or get_settings()
            bound = normalize_source(source or cls._bound_source or settings.config_source)
            namespace = namespace or default_namespace(
                settings.resource_dir, settings.resource_package
            )

            manager = cls(
                source=bound,
                settings=settings,
                namespace=namespace,
                property_source=property_source
                or PropertySource(namespace, encoding=settings.encoding),
                provider_registry=provider_registry or SecurityProviderRegistry(),
                template_resolver=template_resolver,
                engine_logger=engine_logger,
                ecommerce_logger=ecommerce_logger,
            )

            cls._bound_source = bound
            try:
                manager._load()
            except Exception:
                cls._bound_source = None
                raise

            cls._instance = manager
            return manager

    @classmethod
    def instance(cls) -> Optional["ConfigurationManager"]:
        """Return the installed instance without loading, or None."""
        with cls._lock:
            return cls._instance

    @classmethod
    def bound_source(cls) -> Optional[str]:
        """Return the source identifier bound to the singleton, if any."""
        with cls._lock:
            return cls._bound_source

    @classmethod
    def is_initialized(cls) -> bool:
        """Return True if an instance is installed."""
        return cls.instance() is not None

    @classmethod
    def reset(cls) -> None:
        """
        Discard the installed instance. For tests only.

        The bound source identifier and the provider catalog are kept.
        """
        with cls._lock:
            cls._instance = None

    # ------------------------------------------------------------------
    # Load phases
    # ------------------------------------------------------------------

    def _load(self) -> None:
        self._ensure_loggers()
        phase = "properties"

        try:
            self._load_configurations()

            phase = "logging"
            if self._loggers_created_by_sdk:
                apply_log_routing(self.log_routing_properties())
            else:
                apply_http_client_level(self._configurations.get(HTTP_CLIENT_LOG_LEVEL_KEY))

            self.engine_logger.info("************ New Configurator created *************")
            self.engine_logger.info(f"Configurator configuration file = {self._source}")

            phase = "security_providers"
            self._load_security_providers()
            self.engine_logger.info("************ Security Providers Loaded *************")

            phase = "templates"
            self.load_templates()
            self.engine_logger.info("************ XML Templates Loaded *************")

            self.engine_logger.info(self.describe())
        except InitializationError as e:
            self._log_failure(e)
            raise
        except Exception as e:
            if phase == "properties":
                error: InitializationError = ConfigurationError(
                    f"Configuration file ({self._source}) could not be loaded: "
                    f"{type(e).__name__}: {e}",
                    config_file=self._source,
                    phase=phase,
                )
            else:
                error = InitializationError(
                    f"Unexpected error while loading {phase}: {type(e).__name__}: {e}",
                    phase=phase,
                )
            self._log_failure(error)
            raise error from e

    def _log_failure(self, error: InitializationError) -> None:
        self.engine_logger.error(
            f"{type(error).__name__}:- {sanitize_log_message(error.message)}",
            extra={"config_source": self._source, "phase": error.details.get("phase")},
        )

    def _ensure_loggers(self) -> None:
        if self._engine_logger is not None and self._ecommerce_logger is not None:
            return

        self._loggers_created_by_sdk = True
        self._engine_logger, self._ecommerce_logger = create_default_loggers(
            self._settings.engine_logger_name,
            self._settings.ecommerce_logger_name,
        )
        ensure_default_destination(self._settings.logging)

    def _load_configurations(self) -> None:
        properties = self._property_source.load(self._source)
        if not properties:
            raise ConfigurationError(
                "Exception while initializing the configurator - "
                "Invalid properties file provided",
                config_file=self._source,
            )
        self._configurations = dict(properties)

    def _load_security_providers(self) -> None:
        provider_ids, malformed = extract_provider_ids(self._configurations)

        for entry in malformed:
            self.engine_logger.warning(f"Failed to load Security Provider: {entry}")

        for provider_id in provider_ids:
            self.engine_logger.debug(f"Loading Security Provider: {provider_id}")
            self._provider_registry.register(provider_id)

    def load_templates(self) -> Mapping[str, str]:
        """
        Resolve every declared template and replace the template set.

        Keys under ``XMLTemplates.Request.ComplexRoot.`` are never treated
        as templates. The template set is only replaced when all
        templates resolve.

        Returns:
            Read-only view of the new template set.

        Raises:
            InitializationError: A declaration has no source or cannot be
                resolved (TemplateNotFoundError for missing resources).
        """
        with self._lock:
            resolver = self._ensure_template_resolver()
            templates: Dict[str, str] = {}

            for match in iter_matches(self._configurations, TEMPLATE_RULE):
                if isinstance(match, MalformedEntry):
                    raise InitializationError(
                        f"Template declaration has no source: {match.entry}",
                        phase="templates",
                    )
                try:
                    templates[match.name] = resolver.resolve(match.value)
                except InitializationError:
                    raise
                except Exception as e:
                    raise TemplateNotFoundError(
                        f"Template {match.name} could not be loaded from {match.value}: {e}",
                        template_path=match.value,
                    ) from e

            self._xml_templates = templates
            return self.xml_templates

    def _ensure_template_resolver(self) -> TemplateResolver:
        if self._template_resolver is None:
            self._template_resolver = ResourceTemplateResolver(self._namespace)
        return self._template_resolver

    def clear_templates(self) -> None:
        """
        Empty the template set and drop the held resolver. For tests only.

        The next load_templates() uses the resolver set with
        use_template_resolver(), or a fresh default one.
        """
        with self._lock:
            self._xml_templates = {}
            self._template_resolver = None

    def use_template_resolver(self, resolver: TemplateResolver) -> None:
        """Substitute the resolver used by subsequent load_templates() calls."""
        with self._lock:
            self._template_resolver = resolver

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        """Normalized identifier of the loaded properties source."""
        return self._source

    @property
    def configurations(self) -> Mapping[str, str]:
        """Read-only view of all raw properties."""
        return MappingProxyType(self._configurations)

    @property
    def xml_templates(self) -> Mapping[str, str]:
        """Read-only view of template name -> template text."""
        return MappingProxyType(self._xml_templates)

    @property
    def template_resolver(self) -> Optional[TemplateResolver]:
        """Resolver currently held, or None after clear_templates()."""
        return self._template_resolver

    @property
    def engine_logger(self) -> LoggerLike:
        """Logger for general engine messages."""
        return self._engine_logger

    @property
    def ecommerce_logger(self) -> LoggerLike:
        """Logger for transactional messages."""
        return self._ecommerce_logger

    @property
    def loggers_created_by_sdk(self) -> bool:
        """True if the SDK created its own default loggers."""
        return self._loggers_created_by_sdk

    @property
    def sensitive_keys(self) -> List[str]:
        """Keys whose values are redacted in diagnostic output."""
        return list(self._settings.sensitive_keys)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return one raw property value."""
        return self._configurations.get(key, default)

    def get_template(self, name: str) -> str:
        """
        Return the text of one template.

        Raises:
            KeyError: If no template has that name.
        """
        return self._xml_templates[name]

    def log_routing_properties(self) -> Dict[str, str]:
        """Return the ``log4j*`` properties with their full keys."""
        return extract(self._configurations, LOG_ROUTING_RULE)

    def describe(self) -> str:
        """
        Build a diagnostic dump of all properties and templates.

        Values of sensitive keys are replaced with ``########``.

        Returns:
            Multi-line description.
        """
        redacted = redact_properties(self._configurations, self._settings.sensitive_keys)

        lines = ["", "", "************* Start Of Configuration Properties *************"]
        lines.extend(f"{key}={redacted[key]}" for key in sorted(redacted))
        lines.append("************* End Of Configuration Properties *************")
        lines.extend(["", "", "************* Start of XML Templates *************"])
        lines.extend(f"{name}={self._xml_templates[name]}" for name in sorted(self._xml_templates))
        lines.append("************* End of XML Templates *************")

        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a serializable dictionary.

        Returns:
            Dictionary with redacted properties and template names.
        """
        return {
            "source": self._source,
            "configurations": redact_properties(
                self._configurations, self._settings.sensitive_keys
            ),
            "templates": sorted(self._xml_templates),
            "log_routing": self.log_routing_properties(),
            "loggers_created_by_sdk": self._loggers_created_by_sdk,
        }

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"ConfigurationManager(source={self._source!r}, "
            f"properties={len(self._configurations)}, "
            f"templates={len(self._xml_templates)})"
        )


def get_configuration_manager(
    source: Optional[str] = None, **kwargs: Any
) -> ConfigurationManager:
    """
    Get the configurator singleton.

    Args:
        source: Optional resource identifier of the properties source.
        **kwargs: Keyword arguments accepted by ConfigurationManager.initialize().

    Returns:
        ConfigurationManager instance.
    """
    return ConfigurationManager.initialize(source, **kwargs)


def reset_configuration_manager() -> None:
    """Discard the configurator singleton. For tests only."""
    ConfigurationManager.reset()

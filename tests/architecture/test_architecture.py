"""Architecture import rule tests for the ledger service.

These tests enforce the project's architectural boundaries:
- Ledger logic (services/) is independent of the HTTP framework layer
- Routers are thin wrappers that don't reach into configuration or lifecycle
- Config and schemas remain leaf-like modules
"""

from __future__ import annotations

import pytest
from pytestarch import EvaluableArchitecture, LayeredArchitecture, LayerRule, Rule

# ---------------------------------------------------------------------------
# Module-level rules: services layer independence
# ---------------------------------------------------------------------------


@pytest.mark.architecture
class TestServicesLayerIndependence:
    """The services/ layer holds ledger logic and storage with no HTTP concerns."""

    def test_services_must_not_import_routers(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Ledger logic must not depend on HTTP routing."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.services")
            .should_not()
            .import_modules_that()
            .are_sub_modules_of("ledger_service.routers")
            .assert_applies(evaluable)
        )

    def test_services_must_not_import_app(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Ledger logic must not depend on the application factory."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.services")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.app")
            .assert_applies(evaluable)
        )

    def test_services_must_not_import_schemas(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Ledger logic must not depend on Pydantic HTTP schemas."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.services")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.schemas")
            .assert_applies(evaluable)
        )

    def test_services_must_not_import_config(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Settings reach the services through constructor arguments only."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.services")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.config")
            .assert_applies(evaluable)
        )


# ---------------------------------------------------------------------------
# Module-level rules: config and schemas are leaf modules
# ---------------------------------------------------------------------------


@pytest.mark.architecture
class TestLeafModules:
    """Config and schemas should not depend on service internals."""

    def test_config_must_not_import_services(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Configuration loading must not depend on ledger logic."""
        (
            Rule()
            .modules_that()
            .are_named("ledger_service.config")
            .should_not()
            .import_modules_that()
            .are_sub_modules_of("ledger_service.services")
            .assert_applies(evaluable)
        )

    def test_config_must_not_import_core(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Configuration loading must not depend on core infrastructure."""
        (
            Rule()
            .modules_that()
            .are_named("ledger_service.config")
            .should_not()
            .import_modules_that()
            .are_sub_modules_of("ledger_service.core")
            .assert_applies(evaluable)
        )

    def test_schemas_must_not_import_services(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """HTTP schemas must not depend on ledger logic."""
        (
            Rule()
            .modules_that()
            .are_named("ledger_service.schemas")
            .should_not()
            .import_modules_that()
            .are_sub_modules_of("ledger_service.services")
            .assert_applies(evaluable)
        )

    def test_schemas_must_not_import_routers(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """HTTP schemas must not depend on routers."""
        (
            Rule()
            .modules_that()
            .are_named("ledger_service.schemas")
            .should_not()
            .import_modules_that()
            .are_sub_modules_of("ledger_service.routers")
            .assert_applies(evaluable)
        )


# ---------------------------------------------------------------------------
# Module-level rules: routers are thin wrappers
# ---------------------------------------------------------------------------


@pytest.mark.architecture
class TestRouterConstraints:
    """Routers depend on state, schemas and helpers; configuration flows via AppState."""

    def test_routers_must_not_import_config_directly(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Routers must not read configuration directly."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.routers")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.config")
            .assert_applies(evaluable)
        )

    def test_routers_must_not_import_app(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Routers must not import the application factory (circular dependency)."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.routers")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.app")
            .assert_applies(evaluable)
        )

    def test_routers_must_not_import_lifespan(
        self,
        evaluable: EvaluableArchitecture,
    ) -> None:
        """Routers must not depend on lifecycle management."""
        (
            Rule()
            .modules_that()
            .are_sub_modules_of("ledger_service.routers")
            .should_not()
            .import_modules_that()
            .are_named("ledger_service.core.lifespan")
            .assert_applies(evaluable)
        )


# ---------------------------------------------------------------------------
# Layer-level rules
# ---------------------------------------------------------------------------


@pytest.mark.architecture
class TestLayeredArchitecture:
    """Layer-level dependency rules enforcing the service architecture."""

    def test_services_layer_must_not_access_routers_layer(
        self,
        evaluable: EvaluableArchitecture,
        layered_arch: LayeredArchitecture,
    ) -> None:
        """Ledger logic layer must not access the HTTP routing layer."""
        (
            LayerRule()
            .based_on(layered_arch)
            .layers_that()
            .are_named("services")
            .should_not()
            .access_layers_that()
            .are_named("routers")
            .assert_applies(evaluable)
        )

    def test_services_layer_must_not_access_core_layer(
        self,
        evaluable: EvaluableArchitecture,
        layered_arch: LayeredArchitecture,
    ) -> None:
        """Ledger logic layer must not depend on core infrastructure."""
        (
            LayerRule()
            .based_on(layered_arch)
            .layers_that()
            .are_named("services")
            .should_not()
            .access_layers_that()
            .are_named("core")
            .assert_applies(evaluable)
        )

    def test_core_layer_must_not_access_routers_layer(
        self,
        evaluable: EvaluableArchitecture,
        layered_arch: LayeredArchitecture,
    ) -> None:
        """Core infrastructure must not depend on individual routers."""
        (
            LayerRule()
            .based_on(layered_arch)
            .layers_that()
            .are_named("core")
            .should_not()
            .access_layers_that()
            .are_named("routers")
            .assert_applies(evaluable)
        )

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from pydantic import TypeAdapter

from pension_api.adapters.controllers.base_controller import BaseController
from pension_api.adapters.controllers.calculation_controller import CalculationController
from pension_api.adapters.schemas.http.calculation_schemas import CalculationMutationHTTP
from pension_api.domain.entities.mutation import CalculationMutation, DossierMutation


class _RecordingUseCase:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Sequence[CalculationMutation]]] = []

    def execute(self, tenant_id: str, mutations: Sequence[CalculationMutation]) -> Any:
        self.calls.append((tenant_id, mutations))
        return "dto"


def test_controller_maps_mutations_and_delegates() -> None:
    uc = _RecordingUseCase()
    controller = CalculationController(uc)  # type: ignore[arg-type]
    mutation = TypeAdapter(CalculationMutationHTTP).validate_python(
        {
            "mutation_id": str(uuid4()),
            "mutation_definition_name": "apply_indexation",
            "mutation_type": "DOSSIER",
            "dossier_id": "some-dossier",
            "actual_at": "2021-01-01",
            "mutation_properties": {"percentage": 0.03},
        }
    )

    result = controller.process("tenant_a", [mutation])

    assert result == "dto"
    ((tenant_id, mapped),) = uc.calls
    assert tenant_id == "tenant_a"
    assert isinstance(mapped[0], DossierMutation)
    assert mapped[0].dossier_id == "some-dossier"


def test_controller_has_no_instance_dict() -> None:
    controller = CalculationController(_RecordingUseCase())  # type: ignore[arg-type]

    assert isinstance(controller, BaseController)
    assert not hasattr(controller, "__dict__")

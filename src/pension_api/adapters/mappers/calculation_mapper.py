# src/pension_api/adapters/mappers/calculation_mapper.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Calculation mappers (Adapters Layer).

Purpose:
    Translate between the HTTP contract and the inner layers:
      * request mutations (tagged union) -> domain mutation entities;
      * application response DTO -> HTTP response schema.

Layer:
    adapters/mappers
"""

from __future__ import annotations

from collections.abc import Sequence

from pension_api.adapters.schemas.http.calculation_schemas import (
    CalculationResponseHTTP,
    DossierCreationMutationHTTP,
    DossierMutationHTTP,
)
from pension_api.application.schemas.dto.calculation import CalculationResponseDTO
from pension_api.domain.entities.mutation import (
    CalculationMutation,
    DossierCreationMutation,
    DossierMutation,
    MutationProperties,
)


def to_domain_mutation(
    mutation: DossierCreationMutationHTTP | DossierMutationHTTP,
) -> CalculationMutation:
    """Map one request mutation onto its domain entity."""
    properties = MutationProperties(mutation.mutation_properties)
    if isinstance(mutation, DossierMutationHTTP):
        return DossierMutation(
            mutation_id=mutation.mutation_id,
            mutation_definition_name=mutation.mutation_definition_name,
            actual_at=mutation.actual_at,
            mutation_properties=properties,
            dossier_id=mutation.dossier_id,
        )
    return DossierCreationMutation(
        mutation_id=mutation.mutation_id,
        mutation_definition_name=mutation.mutation_definition_name,
        actual_at=mutation.actual_at,
        mutation_properties=properties,
    )


def to_domain_mutations(
    mutations: Sequence[DossierCreationMutationHTTP | DossierMutationHTTP],
) -> list[CalculationMutation]:
    """Map request mutations in order."""
    return [to_domain_mutation(m) for m in mutations]


def to_http_response(dto: CalculationResponseDTO) -> CalculationResponseHTTP:
    """Map the application response DTO onto the HTTP response schema.

    Both trees share field names; the DTO is dumped to JSON-native values and
    re-validated so the HTTP schema owns wire formatting.
    """
    return CalculationResponseHTTP.model_validate(dto.model_dump(mode="json"))


__all__ = ["to_domain_mutation", "to_domain_mutations", "to_http_response"]

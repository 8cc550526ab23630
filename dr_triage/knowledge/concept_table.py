"""
Dr.Triage — Таблиця концептів

Локальна база знань: симптоми (id, назва, синоніми, кластер, серйозність)
та стани з ваговими внесками симптомів. Спільна для екстрактора згадок,
локального міркувача та його правила тріажу.

Порядок концептів і станів у таблиці значущий: він визначає порядок
питань за замовчуванням та розв'язує нічиї при ранжуванні.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional
from enum import Enum

import numpy as np

from dr_triage.exceptions import ConfigurationError
from dr_triage.schemas import ConceptKind


class Seriousness(str, Enum):
    """Серйозність симптому"""
    MILD = "mild"
    MODERATE = "moderate"
    SERIOUS = "serious"
    EMERGENCY = "emergency"


# Симптоми з такою серйозністю → emergency
ALARMING_SERIOUSNESS = {Seriousness.SERIOUS, Seriousness.EMERGENCY}


@dataclass
class Concept:
    """Симптом або фактор ризику"""
    id: str
    name: str
    question: str
    common_name: Optional[str] = None
    category: str = "general"
    seriousness: Seriousness = Seriousness.MILD
    synonyms: List[str] = field(default_factory=list)
    kind: ConceptKind = ConceptKind.SYMPTOM

    @property
    def is_alarming(self) -> bool:
        return self.seriousness in ALARMING_SERIOUSNESS

    @property
    def phrases(self) -> List[str]:
        """Фрази для пошуку: назва, побутова назва, синоніми (в цьому порядку)"""
        result = [self.name]
        if self.common_name:
            result.append(self.common_name)
        result.extend(self.synonyms)
        return result


@dataclass
class ConditionProfile:
    """Стан з ваговими внесками симптомів"""
    id: str
    name: str
    common_name: Optional[str] = None
    severity: str = "mild"
    acuteness: Optional[str] = None
    prevalence: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    weights: Dict[str, float] = field(default_factory=dict)


class ConceptTable:
    """
    Таблиця концептів та станів.

    Приклад використання:
        table = ConceptTable.default()

        concept = table.get_concept("s_1193")
        print(concept.name)                     # Headache
        print(table.cluster_members("headache"))  # ['s_1193', 's_488', 's_98']

        matrix = table.weight_matrix()          # [n_conditions, n_concepts]
    """

    def __init__(
        self,
        concepts: List[Concept],
        conditions: List[ConditionProfile],
        clusters: Optional[Dict[str, List[str]]] = None,
    ):
        self.concepts = list(concepts)
        self.conditions = list(conditions)
        self.clusters: Dict[str, List[str]] = {
            name: list(members) for name, members in (clusters or {}).items()
        }

        self._concept_index: Dict[str, int] = {}
        for i, concept in enumerate(self.concepts):
            if concept.id in self._concept_index:
                raise ConfigurationError(f"Duplicate concept id: {concept.id}")
            self._concept_index[concept.id] = i

        seen = set()
        for condition in self.conditions:
            if condition.id in seen:
                raise ConfigurationError(f"Duplicate condition id: {condition.id}")
            seen.add(condition.id)
            unknown = set(condition.weights) - set(self._concept_index)
            if unknown:
                raise ConfigurationError(
                    f"Condition {condition.id} references unknown concepts: {sorted(unknown)}"
                )

        # Концепт може належати кільком кластерам
        for name, members in self.clusters.items():
            unknown = set(members) - set(self._concept_index)
            if unknown:
                raise ConfigurationError(
                    f"Cluster {name} references unknown concepts: {sorted(unknown)}"
                )

        self._weight_matrix: Optional[np.ndarray] = None

    # -------------------------------------------------------------------------
    # Створення
    # -------------------------------------------------------------------------

    @classmethod
    def default(cls) -> "ConceptTable":
        """Вбудована демо-таблиця"""
        from .default_table import DEFAULT_TABLE
        return cls.from_dict(DEFAULT_TABLE)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptTable":
        """
        Створити з словника:
            {"concepts": [{...}], "conditions": [{..., "weights": {id: w}}],
             "clusters": {name: [concept_id, ...]}}
        """
        try:
            concepts = [
                Concept(
                    id=c["id"],
                    name=c["name"],
                    question=c.get("question") or f"Do you have {c['name'].lower()}?",
                    common_name=c.get("common_name"),
                    category=c.get("category", "general"),
                    seriousness=Seriousness(c.get("seriousness", "mild")),
                    synonyms=list(c.get("synonyms", [])),
                    kind=ConceptKind(c.get("kind", "symptom")),
                )
                for c in data.get("concepts", [])
            ]
            conditions = [
                ConditionProfile(
                    id=d["id"],
                    name=d["name"],
                    common_name=d.get("common_name"),
                    severity=d.get("severity", "mild"),
                    acuteness=d.get("acuteness"),
                    prevalence=d.get("prevalence"),
                    categories=list(d.get("categories", [])),
                    weights={k: float(v) for k, v in d.get("weights", {}).items()},
                )
                for d in data.get("conditions", [])
            ]
            clusters = {
                name: list(members) for name, members in data.get("clusters", {}).items()
            }
        except (KeyError, ValueError, TypeError) as e:
            raise ConfigurationError(f"Malformed concept table: {e}") from e

        return cls(concepts, conditions, clusters)

    @classmethod
    def from_json(cls, path: str) -> "ConceptTable":
        """Завантажити з JSON файлу"""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        concepts = []
        for concept in self.concepts:
            data = asdict(concept)
            data["seriousness"] = concept.seriousness.value
            data["kind"] = concept.kind.value
            concepts.append(data)
        return {
            "concepts": concepts,
            "conditions": [asdict(c) for c in self.conditions],
            "clusters": {name: list(members) for name, members in self.clusters.items()},
        }

    def save(self, path: str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    # -------------------------------------------------------------------------
    # Пошук
    # -------------------------------------------------------------------------

    def get_concept(self, concept_id: str) -> Optional[Concept]:
        idx = self._concept_index.get(concept_id)
        return self.concepts[idx] if idx is not None else None

    def position_of(self, concept_id: str) -> Optional[int]:
        """Позиція концепту в таблиці"""
        return self._concept_index.get(concept_id)

    def clusters_of(self, concept_id: str) -> List[str]:
        """Кластери, до яких належить концепт (в порядку оголошення)"""
        return [name for name, members in self.clusters.items() if concept_id in members]

    def cluster_of(self, concept_id: str) -> Optional[str]:
        clusters = self.clusters_of(concept_id)
        return clusters[0] if clusters else None

    def cluster_members(self, cluster: str) -> List[str]:
        """ID концептів кластера в порядку таблиці"""
        members = set(self.clusters.get(cluster, ()))
        return [c.id for c in self.concepts if c.id in members]

    @property
    def concept_ids(self) -> List[str]:
        return [c.id for c in self.concepts]

    # -------------------------------------------------------------------------
    # Векторизація
    # -------------------------------------------------------------------------

    def weight_matrix(self) -> np.ndarray:
        """Матриця внесків W[condition, concept]"""
        if self._weight_matrix is None:
            matrix = np.zeros((len(self.conditions), len(self.concepts)), dtype=np.float64)
            for i, condition in enumerate(self.conditions):
                for concept_id, weight in condition.weights.items():
                    matrix[i, self._concept_index[concept_id]] = weight
            self._weight_matrix = matrix
        return self._weight_matrix

    def indicator_vector(self, concept_ids: List[str]) -> np.ndarray:
        """Бінарний вектор концептів (невідомі ID ігноруються)"""
        vector = np.zeros(len(self.concepts), dtype=np.float64)
        for concept_id in concept_ids:
            idx = self._concept_index.get(concept_id)
            if idx is not None:
                vector[idx] = 1.0
        return vector

    def __len__(self) -> int:
        return len(self.concepts)

    def __contains__(self, concept_id: str) -> bool:
        return concept_id in self._concept_index

    def __repr__(self) -> str:
        return f"ConceptTable(concepts={len(self.concepts)}, conditions={len(self.conditions)})"

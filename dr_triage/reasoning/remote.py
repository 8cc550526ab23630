"""
Dr.Triage — Адаптер віддаленого діагностичного сервісу

HTTP клієнт до Infermedica-сумісного API (httpx.AsyncClient).

Ендпоінти:
    POST /diagnosis  → ReasoningStep
    POST /triage     → TriageResult
    GET  /search     → [SearchResult]
    POST /parse      → ExtractionResult
    POST /suggest    → [SearchResult]
    POST /explain    → dict

Заголовки: App-Id, App-Key, Dev-Mode, Interview-Id, Content-Type.
Interview-Id = "interview_<case.id>" — окремий для кожного випадку.

Помилки:
    мережа / таймаут → TransportError
    401              → AuthenticationError
    429              → RateLimitError (retry_after з заголовка)
    інший не-2xx     → TransportError(status_code)
    зіпсована відповідь → TransportError
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from dr_triage.config import RemoteBackendConfig
from dr_triage.exceptions import (
    AuthenticationError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from dr_triage.schemas import (
    Choice,
    ConceptKind,
    EvidenceState,
    ExtractionResult,
    Mention,
    PatientCase,
    Question,
    QuestionItem,
    QuestionKind,
    ReasoningStep,
    ScoredCondition,
    SearchResult,
    TriageLevel,
    TriageResult,
    default_choices,
)

from .base import ReasoningClient


logger = logging.getLogger(__name__)


DEFAULT_SEARCH_LIMIT = 8

ENDPOINTS = {
    "diagnosis": "/diagnosis",
    "triage": "/triage",
    "search": "/search",
    "parse": "/parse",
    "suggest": "/suggest",
    "explain": "/explain",
}

ERROR_MESSAGES = {
    "invalid_credentials": "Invalid diagnostic API credentials",
    "network": "Network error occurred while connecting to the diagnostic API",
    "invalid_request": "Invalid request format",
    "rate_limit": "API rate limit exceeded",
    "server": "Diagnostic API server error",
    "malformed": "Malformed response from the diagnostic API",
}

# Рівні тріажу сервісу → три рівні Dr.Triage
TRIAGE_LEVELS = {
    "emergency": TriageLevel.EMERGENCY,
    "emergency_ambulance": TriageLevel.EMERGENCY,
    "consultation": TriageLevel.CONSULTATION,
    "consultation_24": TriageLevel.CONSULTATION,
    "self_care": TriageLevel.SELF_CARE,
}


def interview_id_for(case: PatientCase) -> str:
    """Ідентифікатор інтерв'ю для заголовка Interview-Id"""
    return f"interview_{case.id}"


class RemoteReasoner(ReasoningClient):
    """
    Клієнт віддаленого сервісу міркувань.

    Приклад:
        config = RemoteBackendConfig(app_id="...", app_key="...")
        async with RemoteReasoner(config) as reasoner:
            step = await reasoner.next_step(case)

    Для тестів можна передати transport=httpx.MockTransport(handler).
    """

    def __init__(
        self,
        config: RemoteBackendConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    # -------------------------------------------------------------------------
    # ReasoningClient
    # -------------------------------------------------------------------------

    async def next_step(self, case: PatientCase) -> ReasoningStep:
        self._check_initial(case)
        data = await self._request(
            "POST", ENDPOINTS["diagnosis"],
            interview_id=interview_id_for(case),
            json=self.patient_body(case),
        )
        return self._parse_step(data)

    async def classify_triage(self, case: PatientCase) -> TriageResult:
        self._check_evidence(case)
        data = await self._request(
            "POST", ENDPOINTS["triage"],
            interview_id=interview_id_for(case),
            json=self.patient_body(case),
        )
        return self._parse_triage(data, case)

    async def search(
        self,
        phrase: str,
        *,
        limit: Optional[int] = None,
        case: Optional[PatientCase] = None,
    ) -> List[SearchResult]:
        if not (phrase or "").strip():
            return []
        limit = limit or DEFAULT_SEARCH_LIMIT

        params: Dict[str, Any] = {"phrase": phrase.strip(), "max_results": limit}
        interview_id = None
        if case is not None:
            params["sex"] = case.demographics.sex.value
            params["age.value"] = case.demographics.age
            interview_id = interview_id_for(case)

        data = await self._request(
            "GET", ENDPOINTS["search"], interview_id=interview_id, params=params,
        )
        return self._parse_search(data)[:limit]

    async def parse_text(
        self,
        text: str,
        case: Optional[PatientCase] = None,
    ) -> ExtractionResult:
        if not (text or "").strip():
            return ExtractionResult()

        body: Dict[str, Any] = {"text": text}
        interview_id = None
        if case is not None:
            body["sex"] = case.demographics.sex.value
            body["age"] = {"value": case.demographics.age}
            body["context"] = [e.concept_id for e in case.present_evidence]
            interview_id = interview_id_for(case)

        data = await self._request(
            "POST", ENDPOINTS["parse"], interview_id=interview_id, json=body,
        )
        return self._parse_mentions(data)

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Додаткові ендпоінти
    # -------------------------------------------------------------------------

    async def suggest(self, case: PatientCase, max_results: int = 8) -> List[SearchResult]:
        """Симптоми, які варто запитати з огляду на поточні докази"""
        body = self.patient_body(case)
        body["max_results"] = max_results
        data = await self._request(
            "POST", ENDPOINTS["suggest"],
            interview_id=interview_id_for(case),
            json=body,
        )
        return self._parse_search(data)

    async def explain(self, case: PatientCase, condition_id: str) -> Dict[str, Any]:
        """Пояснення: які докази підтримують / суперечать стану"""
        if not condition_id:
            raise ValidationError("condition_id is required")
        self._check_initial(case)

        body = self.patient_body(case)
        body["target"] = condition_id
        data = await self._request(
            "POST", ENDPOINTS["explain"],
            interview_id=interview_id_for(case),
            json=body,
        )
        if not isinstance(data, dict):
            raise TransportError(ERROR_MESSAGES["malformed"], details={"endpoint": "explain"})
        return data

    # -------------------------------------------------------------------------
    # Запити
    # -------------------------------------------------------------------------

    def headers(self, interview_id: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "App-Id": self.config.app_id,
            "App-Key": self.config.app_key,
            "Dev-Mode": "true" if self.config.dev_mode else "false",
            "Content-Type": "application/json",
            "Model": f"infermedica-{self.config.language}",
        }
        if interview_id:
            headers["Interview-Id"] = interview_id
        return headers

    def patient_body(self, case: PatientCase) -> Dict[str, Any]:
        """Тіло запиту {sex, age: {value}, evidence: [...], extras}"""
        return {
            "sex": case.demographics.sex.value,
            "age": {"value": case.demographics.age},
            "evidence": [
                {
                    "id": item.concept_id,
                    "choice_id": item.state.value,
                    "source": item.source.value,
                    "initial": item.is_initial,
                }
                for item in case.evidence
            ],
            "extras": {"disable_groups": self.config.disable_groups},
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        interview_id: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._http.request(
                method, endpoint,
                json=json,
                params=params,
                headers=self.headers(interview_id),
            )
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling %s: %s", endpoint, e)
            raise TransportError(
                ERROR_MESSAGES["network"], details={"endpoint": endpoint, "reason": "timeout"},
            ) from e
        except httpx.RequestError as e:
            logger.warning("Connection error calling %s: %s", endpoint, e)
            raise TransportError(
                ERROR_MESSAGES["network"], details={"endpoint": endpoint, "reason": str(e)},
            ) from e

        self._check_response(response, endpoint)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Invalid JSON from %s", endpoint)
            raise TransportError(
                ERROR_MESSAGES["malformed"],
                status_code=response.status_code,
                details={"endpoint": endpoint},
            ) from e

        logger.debug("%s %s -> %d", method, endpoint, response.status_code)
        return data

    def _check_response(self, response: httpx.Response, endpoint: str) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return

        message = self._error_message(response)
        details = {"endpoint": endpoint}
        logger.warning("%s returned HTTP %d", endpoint, status)

        if status == 401:
            raise AuthenticationError(
                ERROR_MESSAGES["invalid_credentials"], status_code=401, details=details,
            )
        if status == 429:
            retry_after = response.headers.get("retry-after")
            try:
                retry_after = float(retry_after) if retry_after else None
            except ValueError:
                retry_after = None
            raise RateLimitError(ERROR_MESSAGES["rate_limit"], retry_after=retry_after, details=details)
        if status == 400:
            raise TransportError(
                message or ERROR_MESSAGES["invalid_request"], status_code=400, details=details,
            )
        raise TransportError(
            message or ERROR_MESSAGES["server"], status_code=status, details=details,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            return data["message"]
        return None

    # -------------------------------------------------------------------------
    # Розбір відповідей
    # -------------------------------------------------------------------------

    def _parse_step(self, data: Any) -> ReasoningStep:
        try:
            if not isinstance(data, dict):
                raise TypeError("expected an object")
            should_stop = data.get("should_stop", False)
            if not isinstance(should_stop, bool):
                raise TypeError("should_stop must be a boolean")
            conditions = [self._parse_condition(c) for c in data["conditions"]]
            question = self._parse_question(data.get("question"))
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                ERROR_MESSAGES["malformed"], details={"endpoint": "diagnosis", "reason": str(e)},
            ) from e

        return ReasoningStep(
            question=None if should_stop else question,
            conditions=conditions,
            should_stop=should_stop,
        )

    @staticmethod
    def _parse_condition(data: Dict[str, Any]) -> ScoredCondition:
        probability = data["probability"]
        if isinstance(probability, bool) or not isinstance(probability, (int, float)):
            raise TypeError(f"probability must be a number, got {probability!r}")
        return ScoredCondition(
            id=data["id"],
            name=data["name"],
            common_name=data.get("common_name"),
            probability=float(probability),
            severity=data.get("severity"),
            acuteness=data.get("acuteness"),
            prevalence=data.get("prevalence"),
        )

    @staticmethod
    def _parse_question(data: Optional[Dict[str, Any]]) -> Optional[Question]:
        if data is None:
            return None

        items = []
        for item in data["items"]:
            raw_choices = item.get("choices")
            if raw_choices:
                choices = [Choice(id=EvidenceState(c["id"]), label=c["label"]) for c in raw_choices]
            else:
                choices = default_choices()
            items.append(QuestionItem(concept_id=item["id"], name=item["name"], choices=choices))

        return Question(
            kind=QuestionKind(data.get("type", "single")),
            prompt=data["text"],
            items=items,
        )

    def _parse_triage(self, data: Any, case: PatientCase) -> TriageResult:
        try:
            if not isinstance(data, dict):
                raise TypeError("expected an object")
            level = TRIAGE_LEVELS[data["triage_level"]]
            description = data["description"]
            if not isinstance(description, str):
                raise TypeError("description must be a string")
            label = data.get("label") or description
            serious = self._resolve_serious(data.get("serious") or [], case)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                ERROR_MESSAGES["malformed"], details={"endpoint": "triage", "reason": str(e)},
            ) from e

        return TriageResult(
            level=level,
            label=label,
            description=description,
            serious_conditions=serious,
        )

    def _resolve_serious(
        self,
        entries: List[Dict[str, Any]],
        case: PatientCase,
    ) -> List[ScoredCondition]:
        # Серйозні стани — підмножина станів випадку; ймовірність не вигадується
        known = {c.id: c for c in case.conditions}
        result = []
        for entry in entries:
            if entry["id"] in known:
                result.append(known[entry["id"]])
            elif "probability" in entry:
                result.append(self._parse_condition(entry))
            else:
                logger.debug("Skipping serious entry without score: %s", entry["id"])
        return result

    @staticmethod
    def _parse_search(data: Any) -> List[SearchResult]:
        try:
            if not isinstance(data, list):
                raise TypeError("expected a list")
            return [
                SearchResult(
                    concept_id=item["id"],
                    label=item.get("label") or item["name"],
                    kind=ConceptKind(item.get("type", "symptom")),
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                ERROR_MESSAGES["malformed"], details={"endpoint": "search", "reason": str(e)},
            ) from e

    @staticmethod
    def _parse_mentions(data: Any) -> ExtractionResult:
        try:
            if not isinstance(data, dict):
                raise TypeError("expected an object")
            mentions = [
                Mention(
                    concept_id=m["id"],
                    name=m["name"],
                    matched_phrase=m.get("orth") or m["name"].lower(),
                    state=EvidenceState(m.get("choice_id", "present")),
                )
                for m in data.get("mentions", [])
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(
                ERROR_MESSAGES["malformed"], details={"endpoint": "parse", "reason": str(e)},
            ) from e

        return ExtractionResult(
            mentions=mentions,
            is_obvious=bool(data.get("obvious", len(mentions) > 0)),
        )

    def __repr__(self) -> str:
        return f"RemoteReasoner(base_url={self.config.base_url!r})"

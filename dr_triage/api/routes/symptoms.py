"""
Dr.Triage — Symptoms Routes

Endpoints для роботи з симптомами:
- Список концептів таблиці
- Пошук концептів за фразою
- NLP витягування згадок з тексту
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from dr_triage.schemas import ExtractionResult, SearchResult

from ..dependencies import get_backend, BackendManager
from ..models import ParseTextRequest, SearchResponse

router = APIRouter(prefix="/symptoms", tags=["Symptoms"])


@router.get("", response_model=List[SearchResult])
async def list_symptoms(
    backend: BackendManager = Depends(get_backend)
) -> List[SearchResult]:
    """Концепти локальної таблиці (в порядку таблиці)"""
    return [
        SearchResult(concept_id=c.id, label=c.name, kind=c.kind)
        for c in backend.table.concepts
    ]


@router.get("/search", response_model=SearchResponse)
async def search_symptoms(
    q: str = Query(..., min_length=1, max_length=100),
    limit: Optional[int] = Query(default=None, ge=1, le=50),
    backend: BackendManager = Depends(get_backend)
) -> SearchResponse:
    """
    Пошук концептів за фразою.

    - **q**: Пошуковий запит
    - **limit**: Максимальна кількість результатів (за замовчуванням search_limit конфігу)
    """
    results = await backend.client.search(q, limit=limit)

    return SearchResponse(
        query=q,
        results=results,
        total=len(results)
    )


@router.post("/parse", response_model=ExtractionResult)
async def parse_symptoms(
    request: ParseTextRequest,
    backend: BackendManager = Depends(get_backend)
) -> ExtractionResult:
    """
    Витягнути згадки симптомів з тексту.

    Приклад:
    ```json
    {
        "text": "Bad headache and a stiff neck"
    }
    ```

    Заперечення не розпізнаються: кожна згадка має стан present.
    """
    return await backend.client.parse_text(request.text)

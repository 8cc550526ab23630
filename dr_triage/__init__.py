"""
Dr.Triage — Адаптивне діагностичне інтерв'ю та тріаж

Ядро пацієнтського телемедичного порталу: за віком, статтю та набором
симптомів веде цикл питання/відповідь, ранжує можливі стани та
визначає рівень терміновості (emergency / consultation / self_care).

Модулі:
- config: Конфігурація системи
- schemas: Pydantic моделі (випадок, докази, питання, тріаж)
- evidence: Операції над списком доказів
- knowledge: Локальна таблиця концептів та станів
- nlp: Витягування згадок симптомів з тексту
- reasoning: Клієнт міркувань (віддалений сервіс / локальний резерв)
- interview: Оркестратор інтерв'ю
- api: REST API
"""

__version__ = "0.1.0"
__author__ = "Oleksii Bychkov"

from .config import DrTriageConfig, get_default_config

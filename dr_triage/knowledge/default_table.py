"""
Dr.Triage — Вбудована демо-таблиця концептів

10 симптомів та 6 станів. Використовується локальним міркувачем, коли
віддалений сервіс не налаштований або недоступний.

Кластери (гарячка належить обом):
- headache: головний біль → світлочутливість, гарячка
- respiratory: кашель → задишка, гарячка
"""

DEFAULT_TABLE = {
    "concepts": [
        {
            "id": "s_1193",
            "name": "Headache",
            "common_name": "Head pain",
            "question": "Do you have a headache?",
            "category": "neurological",
            "seriousness": "moderate",
            "synonyms": ["head ache", "head hurts", "migraine", "головний біль", "болить голова"],
        },
        {
            "id": "s_488",
            "name": "Photophobia",
            "common_name": "Light sensitivity",
            "question": "Are you sensitive to light?",
            "category": "neurological",
            "seriousness": "moderate",
            "synonyms": ["sensitive to light", "light hurts my eyes", "світлобоязнь"],
        },
        {
            "id": "s_418",
            "name": "Neck stiffness",
            "common_name": "Stiff neck",
            "question": "Do you have neck stiffness?",
            "category": "musculoskeletal",
            "seriousness": "serious",
            "synonyms": ["neck is stiff", "can't bend my neck", "ригідність шиї"],
        },
        {
            "id": "s_98",
            "name": "Fever",
            "common_name": "High temperature",
            "question": "Do you have a fever?",
            "category": "general",
            "seriousness": "moderate",
            "synonyms": ["temperature", "feverish", "chills", "температура", "жар"],
        },
        {
            "id": "s_13",
            "name": "Cough",
            "common_name": "Coughing",
            "question": "Do you have a cough?",
            "category": "respiratory",
            "seriousness": "mild",
            "synonyms": ["dry cough", "wet cough", "кашель"],
        },
        {
            "id": "s_21",
            "name": "Shortness of breath",
            "common_name": "Difficulty breathing",
            "question": "Do you have shortness of breath?",
            "category": "respiratory",
            "seriousness": "serious",
            "synonyms": ["breathless", "can't breathe", "short of breath", "задишка", "важко дихати"],
        },
        {
            "id": "s_102",
            "name": "Chest pain",
            "common_name": "Pain in chest",
            "question": "Do you have chest pain?",
            "category": "cardiovascular",
            "seriousness": "serious",
            "synonyms": ["chest hurts", "tight chest", "біль у грудях"],
        },
        {
            "id": "s_15",
            "name": "Nausea",
            "common_name": "Feeling sick",
            "question": "Do you feel nauseous?",
            "category": "gastrointestinal",
            "seriousness": "mild",
            "synonyms": ["nauseous", "queasy", "нудота", "нудить"],
        },
        {
            "id": "s_28",
            "name": "Vomiting",
            "common_name": "Being sick",
            "question": "Have you been vomiting?",
            "category": "gastrointestinal",
            "seriousness": "moderate",
            "synonyms": ["threw up", "throwing up", "vomit", "блювота"],
        },
        {
            "id": "s_1394",
            "name": "Fatigue",
            "common_name": "Tiredness",
            "question": "Do you feel unusually tired?",
            "category": "general",
            "seriousness": "mild",
            "synonyms": ["tired", "exhausted", "no energy", "втома", "слабкість"],
        },
    ],
    "conditions": [
        {
            "id": "c_49",
            "name": "Migraine",
            "common_name": "Migraine headache",
            "severity": "moderate",
            "acuteness": "acute_potentially_chronic",
            "prevalence": "common",
            "categories": ["neurological"],
            "weights": {"s_1193": 0.6, "s_488": 0.3},
        },
        {
            "id": "c_151",
            "name": "Meningitis",
            "common_name": "Brain infection",
            "severity": "severe",
            "acuteness": "acute",
            "prevalence": "rare",
            "categories": ["neurological", "infectious"],
            "weights": {"s_1193": 0.2, "s_418": 0.4, "s_98": 0.3},
        },
        {
            "id": "c_55",
            "name": "Tension-type headache",
            "common_name": "Tension headache",
            "severity": "mild",
            "acuteness": "acute_potentially_chronic",
            "prevalence": "very_common",
            "categories": ["neurological"],
            "weights": {"s_1193": 0.6, "s_488": 0.3},
        },
        {
            "id": "c_544",
            "name": "Common cold",
            "common_name": "Cold",
            "severity": "mild",
            "acuteness": "acute",
            "prevalence": "very_common",
            "categories": ["respiratory", "infectious"],
            "weights": {"s_13": 0.4, "s_98": 0.3, "s_1394": 0.2},
        },
        {
            "id": "c_340",
            "name": "Influenza",
            "common_name": "Flu",
            "severity": "moderate",
            "acuteness": "acute",
            "prevalence": "common",
            "categories": ["respiratory", "infectious"],
            "weights": {"s_13": 0.4, "s_98": 0.3, "s_1394": 0.2},
        },
        {
            "id": "c_62",
            "name": "Pneumonia",
            "common_name": "Lung infection",
            "severity": "severe",
            "acuteness": "acute",
            "prevalence": "moderate",
            "categories": ["respiratory", "infectious"],
            "weights": {"s_13": 0.3, "s_21": 0.4, "s_98": 0.2},
        },
    ],
    "clusters": {
        "headache": ["s_1193", "s_488", "s_98"],
        "respiratory": ["s_13", "s_21", "s_98"],
    },
}

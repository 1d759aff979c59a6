# ai_task_manager/analysis/constants.py

ENGLISH = "en"

SUPPORTED_LANGUAGES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
}

# Marker words for the offline detector. Single words match whole words only.
SPANISH_MARKERS = (
    "recordar", "comprar", "regalo", "cumpleaños", "mamá", "cuyo", "octubre",
    "para", "con", "del", "la", "el", "de", "en", "es", "está",
    "llamar", "fin de semana", "este", "esta", "estoy", "tengo", "necesito",
    "quiero", "voy a", "trabajo", "casa", "familia",
    "reunión", "proyecto", "equipo", "tarea", "importante", "urgente",
    "mañana", "hoy", "semana", "mes", "año", "tiempo", "dinero", "salud",
    "amor", "feliz", "triste", "preocupado", "estresado", "ocupado",
)
FALLBACK_DETECTION_LANGUAGE = "es"
FALLBACK_DETECTION_MIN_MATCHES = 2

# Exact phrase -> English, keyed by lower-cased source text
PHRASE_TABLE = {
    # Spanish
    "llamar a mamá este fin de semana": "call mom this weekend",
    "estoy estresado por el proyecto": "i am stressed about the project",
    "necesito programar una reunión": "i need to schedule a meeting",
    "agenda una reunión urgente con el equipo para revisar avances del proyecto":
        "schedule an urgent meeting with the team to review project progress",
    "tengo que trabajar mañana": "i have to work tomorrow",
    "quiero ir al médico": "i want to go to the doctor",
    "necesito comprar comida": "i need to buy food",
    "tengo una cita importante": "i have an important appointment",
    "estoy ocupado con el trabajo": "i am busy with work",
    "necesito descansar": "i need to rest",
    "quiero aprender algo nuevo": "i want to learn something new",
    "ejercitar hoy": "exercise today",
    "limpiar la casa": "clean the house",
    "recordar comprar regalo de cumpleaños para mamá cuyo cumpleaños es octubre 23":
        "remember to buy birthday gift for mom whose birthday is october 23",
    "se vendieron dos perros, agendar el despacho de uno mañana y otro el domingo":
        "two dogs were sold, schedule the delivery of one tomorrow and the other on sunday",

    # French
    "appeler maman ce weekend": "call mom this weekend",
    "je suis stressé par le projet": "i am stressed about the project",
    "je dois programmer une réunion": "i need to schedule a meeting",
    "je dois travailler demain": "i have to work tomorrow",
    "je veux aller chez le médecin": "i want to go to the doctor",
    "je dois acheter de la nourriture": "i need to buy food",
    "j'ai un rendez-vous important": "i have an important appointment",
    "je suis occupé avec le travail": "i am busy with work",
    "j'ai besoin de me reposer": "i need to rest",
    "je veux apprendre quelque chose de nouveau": "i want to learn something new",

    # German
    "mama dieses wochenende anrufen": "call mom this weekend",
    "ich bin gestresst wegen des projekts": "i am stressed about the project",
    "ich muss ein treffen planen": "i need to schedule a meeting",
    "ich muss morgen arbeiten": "i have to work tomorrow",
    "ich will zum arzt gehen": "i want to go to the doctor",
    "ich muss essen kaufen": "i need to buy food",
    "ich habe einen wichtigen termin": "i have an important appointment",
    "ich bin beschäftigt mit der arbeit": "i am busy with work",
    "ich brauche ruhe": "i need to rest",
    "ich will etwas neues lernen": "i want to learn something new",

    # Italian
    "chiamare mamma questo weekend": "call mom this weekend",
    "sono stressato per il progetto": "i am stressed about the project",
    "devo programmare una riunione": "i need to schedule a meeting",
    "devo lavorare domani": "i have to work tomorrow",
    "voglio andare dal dottore": "i want to go to the doctor",
    "devo comprare cibo": "i need to buy food",
    "ho un appuntamento importante": "i have an important appointment",
    "sono occupato con il lavoro": "i am busy with work",
    "ho bisogno di riposare": "i need to rest",
    "voglio imparare qualcosa di nuovo": "i want to learn something new",

    # Portuguese
    "ligar para a mãe neste fim de semana": "call mom this weekend",
    "estou estressado com o projeto": "i am stressed about the project",
    "preciso agendar uma reunião": "i need to schedule a meeting",
    "tenho que trabalhar amanhã": "i have to work tomorrow",
    "quero ir ao médico": "i want to go to the doctor",
    "preciso comprar comida": "i need to buy food",
    "tenho um compromisso importante": "i have an important appointment",
    "estou ocupado com o trabalho": "i am busy with work",
    "preciso descansar": "i need to rest",
    "quero aprender algo novo": "i want to learn something new",
}

# Ordered substring rules: every fragment must appear. First match wins.
SUBSTRING_RULES = (
    (("agenda", "reunión", "equipo"), "schedule a meeting with the team"),
    (("reunión", "urgente"), "urgent meeting"),
    (("proyecto", "avances"), "project progress review"),
    (("estoy", "estresado"), "i am stressed"),
    (("necesito", "reunión"), "i need to schedule a meeting"),
    (("tengo que", "trabajar"), "i have to work"),
    (("quiero", "médico"), "i want to go to the doctor"),
    (("necesito", "comprar"), "i need to buy food"),
    (("tengo", "cita"), "i have an important appointment"),
    (("estoy", "ocupado"), "i am busy with work"),
    (("necesito", "descansar"), "i need to rest"),
    (("quiero", "aprender"), "i want to learn something new"),
)

TABLE_MATCH_CONFIDENCE = 0.8
UNMATCHED_CONFIDENCE = 0.3
BACKEND_TRANSLATION_CONFIDENCE = 0.95

MAX_TITLE_LENGTH = 100

FALLBACK_SUGGESTED_ACTIONS = (
    "Review the task requirements",
    "Plan your approach",
    "Set a timeline for completion",
    "Track your progress",
)

"""Company profile for synthetic HR data generation."""

COMPANY = {
    "name": "Horizon Services",
    "email_domain": "horizon-services.fr",
    "max_tenure_years": 12.0,
    "min_onboarding_days": 5,
    "max_onboarding_days": 45,
}

DEPARTMENTS = [
    "Ressources Humaines",
    "Développement",
    "Marketing",
    "Ventes",
    "Finance",
    "Operations",
    "Support Client",
    "Direction",
]

POSITIONS_BY_DEPARTMENT = {
    "Ressources Humaines": ["DRH", "Chargé RH", "Assistant RH", "Responsable Formation"],
    "Développement": ["Lead Developer", "Développeur Frontend", "Développeur Backend", "DevOps", "QA Engineer"],
    "Marketing": ["Directeur Marketing", "Chef de Produit", "Chargé Marketing", "Community Manager"],
    "Ventes": ["Directeur Commercial", "Responsable Ventes", "Commercial", "Account Manager"],
    "Finance": ["Directeur Financier", "Contrôleur de Gestion", "Comptable", "Analyste Financier"],
    "Operations": ["Directeur Operations", "Chef de Projet", "Coordinateur", "Analyste Process"],
    "Support Client": ["Responsable Support", "Technicien Support", "Customer Success"],
    "Direction": ["PDG", "Directeur Général", "Directeur Adjoint"],
}

# Department distribution weights
DEPARTMENT_WEIGHTS = {
    "Ressources Humaines": 0.08,
    "Développement": 0.24,
    "Marketing": 0.10,
    "Ventes": 0.18,
    "Finance": 0.09,
    "Operations": 0.16,
    "Support Client": 0.12,
    "Direction": 0.03,
}

AGENCY_WEIGHTS = {
    "Paris": 0.32,
    "Lyon": 0.22,
    "Marseille": 0.16,
    "Toulouse": 0.12,
    "Nantes": 0.08,
    "Bordeaux": 0.10,
}

STATUS_WEIGHTS = {
    "active": 0.85,
    "inactive": 0.10,
    "terminated": 0.05,
}

WORKING_TIME_RATE_WEIGHTS = {
    1.0: 0.70,
    0.8: 0.20,
    0.6: 0.08,
    0.5: 0.02,
}

CONTRACT_TYPE_WEIGHTS = {
    "CDI": 0.86,
    "CDD": 0.08,
    "Intérim": 0.035,
    "Stage": 0.025,
}

GENDER_DISTRIBUTION = {
    "Homme": 0.52,
    "Femme": 0.48,
}

SALARY_RANGE = (30_000, 120_000)
SALARY_MEDIAN = 48_000
PERFORMANCE_RANGE = (1, 5)
TRAINING_HOURS_RANGE = (0, 80)

# Remote days per month in raw records; normalizer derives the boolean flag
MAX_REMOTE_WORK_DAYS = 15
REMOTE_WORK_DAYS_THRESHOLD = 4

# Expense amount bucket per category (EUR, inclusive)
EXPENSE_CATEGORIES = {
    "repas": {"weight": 0.40, "amount_range": (8.0, 60.0), "label": "Repas d'affaires"},
    "transport": {"weight": 0.30, "amount_range": (15.0, 400.0), "label": "Déplacement"},
    "materiel": {"weight": 0.18, "amount_range": (50.0, 1_500.0), "label": "Achat de matériel"},
    "formation": {"weight": 0.12, "amount_range": (300.0, 3_500.0), "label": "Session de formation"},
}

ABSENCE_TYPES = {
    "maladie": 0.38,
    "congé": 0.34,
    "personnel": 0.16,
    "formation": 0.12,
}

TASK_TEMPLATES = {
    "onboarding": ["Signer contrat", "Fournir justificatifs", "Formation sécurité", "Visite médicale"],
    "administrative": ["Mettre à jour dossier", "Valider congés", "Compléter évaluation"],
    "evaluation": ["Entretien annuel", "Définir objectifs", "Bilan compétences"],
}

TASK_STATUS_WEIGHTS = {
    "complétée": 0.84,
    "en_cours": 0.10,
    "en_retard": 0.06,
}

# Probability that each document of the employee file is provided
DOCUMENT_TYPES = {
    "contract_signed": ("Contrat signé", 0.95),
    "id_card_provided": ("Pièce d'identité", 0.90),
    "bank_details_provided": ("RIB", 0.92),
    "evaluation_completed": ("Évaluation", 0.85),
    "medical_check_completed": ("Visite médicale", 0.88),
}

"""Fixed catalogues used when creating and generating project content."""

# Six design directions used when no crest style is selected
CREST_STYLES = (
    "Classic",
    "Modern",
    "Contemporary",
    "Minimalist",
    "Romantic",
    "Gothic",
)

CREST_OPTION_COUNT = 6

PROJECT_TYPES = (
    "Wedding",
    "Birthday",
    "Corporate",
    "Product Launch",
    "Gala",
    "Anniversary",
)

BUDGET_RANGES = (
    "Economy",
    "Medium",
    "Premium",
    "Luxury",
)

STANDARD_BRIEFING_QUESTIONS = (
    "What is the main goal of the event (e.g. intimate celebration, extravagant party)?",
    "Which colors are preferred, and which must be avoided completely?",
    "Is there a specific theme or style (e.g. Boho Chic, Industrial, Classic)?",
    "Which decor elements are indispensable (e.g. specific flowers, scenic lighting)?",
    "How would you describe the desired atmosphere (e.g. cozy, energetic, sophisticated)?",
    "Are there materials or objects the client dislikes?",
    "What is the guest profile, and how should it influence the space?",
)

# (label, phase) pairs copied into every new project's checklist
CHECKLIST_TEMPLATE = (
    ("Contract Signed", "Pre-production"),
    ("Briefing Finalized", "Pre-production"),
    ("Technical Site Visit", "Pre-production"),
    ("Floor Plans and Measurements", "Pre-production"),
    ("Visual Approval (Crest/Boards)", "Pre-production"),
    ("Supplies Shopping List", "Production"),
    ("Florist Hired", "Production"),
    ("Lighting Tests", "Production"),
    ("Final Table Layout", "Production"),
    ("Space Marking", "Assembly"),
    ("Furniture Assembly", "Assembly"),
    ("Scenography and Structures", "Assembly"),
    ("Electrical and Lighting", "Assembly"),
    ("Floral Arrangements", "Assembly"),
    ("Final Styling and Objects", "Assembly"),
    ("Post-Assembly Cleaning", "Assembly"),
    ("Maintenance and Restocking", "Event"),
    ("Materials Removal", "Teardown"),
    ("Breakage Inventory", "Teardown"),
    ("Rental Returns", "Teardown"),
)

DEFAULT_PROJECT_NAME = "New Project"
DEFAULT_PROJECT_TYPE = "Wedding"
DEFAULT_GUEST_COUNT = 100
DEFAULT_BUDGET_RANGE = "Medium"

DUPLICATE_SUFFIX = " (Copy)"
REFINED_SUFFIX = " (Refined)"

# Reference assets kept per environment
MAX_REFERENCE_ASSETS = 7

# Furniture assets listed on a dossier environment page
DOSSIER_FURNITURE_LIMIT = 5

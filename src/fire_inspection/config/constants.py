"""Constants and configuration values."""

from ..models.inspection import ChecklistItem, Side

# Tab labels shown for each side photograph
SIDE_LABELS_FR = {
    Side.FRONT: "Avant",
    Side.RIGHT: "Côté Droit",
    Side.REAR: "Arrière",
    Side.LEFT: "Côté Gauche",
}

CHECKLIST_TEMPLATE: tuple[ChecklistItem, ...] = (
    ChecklistItem(id="cl-1", label="Pression des pneus"),
    ChecklistItem(id="cl-2", label="Niveaux des fluides (huile, liquide de refroidissement)"),
    ChecklistItem(id="cl-3", label="Fonctionnement des feux (phares, clignotants, gyrophares)"),
    ChecklistItem(id="cl-4", label="État des équipements de secours (lances, tuyaux, etc.)"),
    ChecklistItem(id="cl-5", label="Propreté du véhicule (intérieur et extérieur)"),
    ChecklistItem(id="cl-6", label="État de la carrosserie (hors impacts signalés)"),
    ChecklistItem(id="cl-7", label="Test de la sirène et des avertisseurs sonores"),
)

# Marker colors (BGR format for OpenCV)
MARKER_FILL_COLOR = (235, 99, 37)  # Blue
MARKER_OUTLINE_COLOR = (255, 255, 255)  # White
MARKER_TEXT_COLOR = (255, 255, 255)

# User-facing messages
MSG_DEFECT_TITLE_REQUIRED = "Le titre du défaut est obligatoire."
MSG_VEHICLE_NAME_REQUIRED = "Le nom du véhicule est obligatoire."
MSG_STATION_REQUIRED = "Impossible d'assigner le véhicule : caserne de l'utilisateur non définie."
MSG_NOT_SIGNED_IN = "Aucun utilisateur n'est connecté."
MSG_VEHICLES_LOAD_FAILED = "Erreur lors du chargement des véhicules."
MSG_VEHICLE_DELETE_FAILED = "Une erreur est survenue lors de la suppression."
MSG_GENERIC_ERROR = "Une erreur est survenue."
MSG_PROFILE_UPDATE_FAILED = "Une erreur est survenue lors de la mise à jour."
MSG_NO_VEHICLE_SELECTED = "Aucun véhicule sélectionné."
MSG_MISSING_API_KEY = (
    "Erreur: La clé API Gemini n'est pas configurée. "
    "Veuillez vérifier les variables d'environnement."
)
MSG_REPORT_FAILED = (
    "Une erreur est survenue lors de la génération du rapport. "
    "Veuillez réessayer. Détails: {details}"
)

# Report prompt (French, Markdown output)
NO_DEFECTS_TEXT = "Aucun défaut externe identifié."
CHECKED_TEXT = "Vérifié"
UNCHECKED_TEXT = "Non vérifié"

REPORT_PROMPT_FR = """
Tu es un expert en maintenance de véhicules d'urgence pour les sapeurs-pompiers.
En te basant sur la liste suivante de défauts constatés et l'état de la checklist pour un camion de pompiers, génère un rapport d'inspection concis, structuré et professionnel en format Markdown.

Le rapport doit inclure :
1.  Un titre clair : "Rapport d'Inspection du Véhicule".
2.  Une section "Défauts Externes Constatés" qui liste les problèmes identifiés. Si aucun défaut, mentionne-le.
3.  Une section "Points de Contrôle (Checklist)" qui résume l'état de la checklist.
4.  Une section "Synthèse et Recommandation" qui donne une conclusion sur l'état général du véhicule et une recommandation claire : "Apte au service" ou "Nécessite une maintenance avant mise en service".

Voici les données de l'inspection :

---
Défauts identifiés :
{defects}
---
État de la checklist :
{checklist}
---
"""

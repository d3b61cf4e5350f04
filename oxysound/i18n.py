# oxysound/i18n.py
import locale

MESSAGES = {
    "en": {
        "app_help": "Compose YouTube playlist URLs and keep playlists on disk.",
        "error_prefix": "Error:",
        "warning_prefix": "Warning:",
        "help_lang": "Set the language for output messages (e.g., 'en' or 'fr').",
        "help_verbose": "Show informational log messages on stderr.",
        "help_config": "Path of the configuration file.",
        "help_ids": "Video IDs, space or comma separated. Can be used multiple times. Write IDs starting with a dash as --ids=-abc.",
        "help_print_playlist": "Name of a saved playlist to print instead of IDs.",
        "help_playlist_name": "Name of the playlist, given before --ids.",
        "ids_and_playlist_exclusive": "Use either --ids or --playlist, not both.",
        "unexpected_arguments": "Unexpected arguments: {args}",
        "name_after_ids": "Give the playlist name before --ids (got '{name}' after it).",
        "setup_intro": "Let's configure oxysound.",
        "prompt_api_key": "YouTube Data API key",
        "prompt_save_directory": "Directory to save playlists in",
        "setup_aborted": "Configuration aborted, nothing was written.",
        "config_written": "Configuration written to {path}",
        "fetching_metadata": "Fetching metadata for {count} video(s)...",
        "video_not_found": "Video '{video_id}' was not found and keeps no metadata.",
        "playlist_saved": "Playlist '{name}' saved to {path}",
        "playlist_overwrite": "Playlist '{name}' already exists and will be overwritten.",
        "playlist_created_new": "Playlist '{name}' does not exist, creating it.",
        "available_playlists": "Available playlists at {path}:",
        "no_playlists": "No playlists saved yet.",
        "playlist_length": "length: {count}",
        "playlist_url": "playlist URL: {url}",
        "published_at": "Published at: {date}",
        "column_title": "Title",
        "column_id": "ID",
        "column_published": "Published",
        "column_channel": "Channel",
        "untitled_video": "(no metadata)",
    },
    "fr": {
        "app_help": "Compose des URL de playlists YouTube et conserve les playlists sur disque.",
        "error_prefix": "Erreur :",
        "warning_prefix": "Attention :",
        "help_lang": "Définit la langue des messages de sortie (ex: 'en' ou 'fr').",
        "help_verbose": "Affiche les messages de journal informatifs sur stderr.",
        "help_config": "Chemin du fichier de configuration.",
        "help_ids": "Identifiants de vidéos, séparés par des espaces ou des virgules. Peut être répété. Écrivez un identifiant commençant par un tiret sous la forme --ids=-abc.",
        "help_print_playlist": "Nom d'une playlist enregistrée à afficher à la place des identifiants.",
        "help_playlist_name": "Nom de la playlist, à donner avant --ids.",
        "ids_and_playlist_exclusive": "Utilisez --ids ou --playlist, pas les deux.",
        "unexpected_arguments": "Arguments inattendus : {args}",
        "name_after_ids": "Donnez le nom de la playlist avant --ids ('{name}' est venu après).",
        "setup_intro": "Configurons oxysound.",
        "prompt_api_key": "Clé de l'API YouTube Data",
        "prompt_save_directory": "Dossier où enregistrer les playlists",
        "setup_aborted": "Configuration interrompue, rien n'a été écrit.",
        "config_written": "Configuration écrite dans {path}",
        "fetching_metadata": "Récupération des métadonnées de {count} vidéo(s)...",
        "video_not_found": "La vidéo '{video_id}' est introuvable et reste sans métadonnées.",
        "playlist_saved": "Playlist '{name}' enregistrée dans {path}",
        "playlist_overwrite": "La playlist '{name}' existe déjà et sera écrasée.",
        "playlist_created_new": "La playlist '{name}' n'existe pas, création en cours.",
        "available_playlists": "Playlists disponibles dans {path} :",
        "no_playlists": "Aucune playlist enregistrée.",
        "playlist_length": "longueur : {count}",
        "playlist_url": "URL de la playlist : {url}",
        "published_at": "Publiée le : {date}",
        "column_title": "Titre",
        "column_id": "ID",
        "column_published": "Publication",
        "column_channel": "Chaîne",
        "untitled_video": "(sans métadonnées)",
    },
}

_current_lang = "en"


def get_default_lang() -> str:
    """Picks French when the system locale is French, English otherwise."""
    try:
        lang_code = locale.getlocale()[0] or ""
    except (ValueError, TypeError):
        lang_code = ""
    return "fr" if lang_code.lower().startswith("fr") else "en"


def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"


def get_lang() -> str:
    return _current_lang


def get_message(key: str, **kwargs) -> str:
    """
    Looks the key up in the current catalogue, then in the English one, and
    fills its placeholders from kwargs.
    """
    template = MESSAGES[_current_lang].get(key) or MESSAGES["en"].get(key)
    if template is None:
        return f"Translation missing for key: {key}"
    try:
        return template.format(**kwargs)
    except KeyError as e:
        return f"Formatting error for key '{key}': missing placeholder {e}"


set_lang(get_default_lang())

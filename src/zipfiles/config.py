# src/zipfiles/config.py

CONFIG_FILENAME = ".zipfilesrc"
USER_SETTINGS_FILENAME = "settings.json"

# Keys accepted in .zipfilesrc and user settings files
INCLUDE_KEY = "includePatterns"
EXCLUDE_KEY = "excludePatterns"
ANNOTATE_KEY = "addFilenameComments"

DEFAULT_INCLUDE_PATTERNS = [
    "**/*.{js,ts,jsx,tsx}",
    "**/*.{html,css,scss,sass,less}",
    "**/*.{json,md,yml,yaml}",
    "**/*.{py,rb,java,go,rs}",
]

DEFAULT_EXCLUDE_PATTERNS = [
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/.DS_Store",
    "**/*.log",
    "**/tmp/**",
    "**/.vscode/**",
    "**/.idea/**",
    "**/coverage/**",
]

DEFAULT_ADD_FILENAME_COMMENTS = True

DEFAULT_SETTINGS = {
    INCLUDE_KEY: DEFAULT_INCLUDE_PATTERNS,
    EXCLUDE_KEY: DEFAULT_EXCLUDE_PATTERNS,
    ANNOTATE_KEY: DEFAULT_ADD_FILENAME_COMMENTS,
}

from ajimi.exceptions import InputFormatError

# Suffix of the changed file -> tag of the fenced block its diff is shown in.
# Checked in order, so more specific suffixes must come first.
FENCE_LANGUAGES: dict[str, str] = {
    ".rs": "rust,noplayground",
    ".gitignore": "gitconfig",
    ".lock": "gitconfig",
    ".toml": "toml",
    ".sh": "bash_script_file",
}

# Used for a diff body that comes without any `diff --git` file header.
ANONYMOUS_LANGUAGE = "txt"


def fence_language(filename: str) -> str:
    for suffix, lang in FENCE_LANGUAGES.items():
        if filename.endswith(suffix):
            return lang
    raise InputFormatError(f"file type unknown for {filename}")

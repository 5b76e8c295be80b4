from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AJIMI_")

    # Placed between hunks that are not adjacent in the rendered diff.
    elision_marker: str = "// << 中略 >>"

    # Prefix of the elision marker emitted right after a re-emitted enclosing
    # context line (e.g. a function signature), so that it reads as the body.
    context_indent: str = "    "

    # First line inside every rendered fenced block.
    filename_annotation: str = "(注:{filename})"

    # Commits whose title contains this are allowed to be absent from the book.
    exempt_title_marker: str = "SKIP_EXPLAIN: "

    # Fence tags accepted by the lint pass in addition to the ones the diff
    # formatter can emit itself.
    extra_block_languages: list[str] = ["rust", "bash", "txt"]

    log_level: str = "INFO"

"""Detect the code-fence language of a file from its name."""

EXTENSION_LANGUAGES: dict[str, str] = {
    # JavaScript/TypeScript
    "js": "javascript",
    "jsx": "jsx",
    "ts": "typescript",
    "tsx": "tsx",
    "mjs": "javascript",
    "cjs": "javascript",
    # Web
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "vue": "vue",
    "svelte": "svelte",
    # Data formats
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "xml": "xml",
    "toml": "toml",
    "csv": "csv",
    # Backend
    "py": "python",
    "rb": "ruby",
    "php": "php",
    "java": "java",
    "kt": "kotlin",
    "kts": "kotlin",
    "scala": "scala",
    "go": "go",
    "rs": "rust",
    "c": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "h": "c",
    "hpp": "cpp",
    "hxx": "cpp",
    "cs": "csharp",
    "swift": "swift",
    "dart": "dart",
    "ex": "elixir",
    "exs": "elixir",
    "erl": "erlang",
    "clj": "clojure",
    "cljs": "clojure",
    "lua": "lua",
    "r": "r",
    "jl": "julia",
    "zig": "zig",
    "nim": "nim",
    "v": "v",
    "cr": "crystal",
    "f90": "fortran",
    "f95": "fortran",
    # Shell/Config
    "sh": "bash",
    "bash": "bash",
    "zsh": "bash",
    "fish": "fish",
    "ps1": "powershell",
    "bat": "batch",
    "cmd": "batch",
    # Markup/Docs
    "md": "markdown",
    "mdx": "mdx",
    "tex": "latex",
    "rst": "rst",
    "adoc": "asciidoc",
    "org": "org",
    # Other
    "sql": "sql",
    "graphql": "graphql",
    "gql": "graphql",
    "proto": "protobuf",
    "tf": "hcl",
    "hcl": "hcl",
    "nix": "nix",
    "dhall": "dhall",
    "diff": "diff",
    "patch": "diff",
}

SPECIAL_FILENAMES: dict[str, str] = {
    "dockerfile": "dockerfile",
    "makefile": "makefile",
    "gnumakefile": "makefile",
    "cmakelists.txt": "cmake",
    "rakefile": "ruby",
    "gemfile": "ruby",
    "vagrantfile": "ruby",
    "podfile": "ruby",
    "brewfile": "ruby",
    "justfile": "just",
    "jenkinsfile": "groovy",
    ".gitignore": "gitignore",
    ".gitattributes": "gitattributes",
    ".editorconfig": "editorconfig",
    ".prettierrc": "json",
    ".eslintrc": "json",
    ".babelrc": "json",
    "tsconfig.json": "jsonc",
    "jsconfig.json": "jsonc",
    "package.json": "json",
    "composer.json": "json",
    "cargo.toml": "toml",
    "go.mod": "go",
    "go.sum": "text",
}


def detect_language(file_path: str) -> str:
    """
    Detect the language identifier used to annotate a markdown code fence.

    Args:
        file_path: Path of the file, with ``/`` separators

    Returns:
        Language identifier, ``text`` when unknown
    """
    filename = file_path.rsplit("/", 1)[-1].lower()

    special = SPECIAL_FILENAMES.get(filename)
    if special:
        return special

    if filename.startswith(".") and filename.endswith(".local"):
        return "ini"

    if filename.startswith(".env"):
        return "ini"

    extension = filename.rsplit(".", 1)[-1]
    return EXTENSION_LANGUAGES.get(extension, "text")

"""
Central configuration for ignore file processing
"""

# Name of the ignore file looked up in every directory
IGNORE_FILENAME = ".gitignore"

# A line containing any of these is dropped before compilation
INVALID_LINE_CHARACTERS = ('^', '\\', ':', '"', '<', '>', '|', '\t')

# Characters a directory or file name unit never matches
NAME_EXCLUDED_CHARACTERS = frozenset('\\/:"*?<>|\n')

# Regex metacharacters escaped inside literal segments. '[' and ']' are left
# alone so bracket expressions keep working as character classes.
LITERAL_ESCAPES = frozenset('\\/^<>$.|+(){}-')

# Translations for glob wildcards inside a literal segment
STAR_TRANSLATION = r'[^/\n]*'
QUESTION_TRANSLATION = r'[^/\n]'

# Limits
MAX_IGNORE_FILE_SIZE = 1024 * 1024  # 1MB

# Environment variables read by ResolverConfig.from_env()
ENV_IGNORE_FILENAME = 'GITIGNORE_RESOLVER_FILENAME'
ENV_MAX_FILE_SIZE = 'GITIGNORE_RESOLVER_MAX_FILE_SIZE'
ENV_WARN_MISSING = 'GITIGNORE_RESOLVER_WARN_MISSING'
ENV_ENCODING = 'GITIGNORE_RESOLVER_ENCODING'

import logging
from importlib import resources

from . import arrays, crypto, dates, files, numbers, objects, strings, validation
from .arrays import (
    ArrayStats,
    array_stats,
    chunk,
    compact,
    difference,
    first,
    flatten,
    group_by,
    intersection,
    last,
    random_item,
    sample,
    shuffle,
    sort_by,
    union,
    unique,
    unzip_lists,
    zip_lists,
)
from .crypto import (
    ScryptParams,
    generate_api_key,
    generate_csrf_token,
    generate_email_verification_token,
    generate_password_reset_token,
    generate_random_bytes,
    generate_session_id,
    generate_token,
    generate_uuid,
    hash_password,
    hash_string,
    hmac_string,
    secure_random_int,
    verify_csrf_token,
    verify_password,
    xor_decrypt,
    xor_encrypt,
)
from .crypto import random_string as secure_random_string
from .dates import (
    DurationOptions,
    end_of,
    format_date,
    format_date_with_timezone,
    format_duration,
    humanize_date,
    start_of,
    time_ago,
    time_ago_with_precision,
    time_from_now,
    time_from_now_with_precision,
)
from .errors import FriendlyfyError, InvalidInput, OperationFailed
from .files import (
    DirEntryInfo,
    FileStats,
    copy_file,
    create_dir,
    delete_dir,
    delete_file,
    dir_exists,
    file_exists,
    get_basename,
    get_dirname,
    get_file_extension,
    get_file_size,
    get_file_stats,
    get_filename_without_extension,
    get_mime_type,
    get_relative_path,
    is_absolute_path,
    is_directory,
    is_file,
    join_paths,
    list_dir,
    move_file,
    normalize_path,
    read_file,
    sanitize_filename,
    write_file,
)
from .i18n import BabelEngine, EnglishEngine, LocaleEngine, engine_for
from .instant import to_instant
from .numbers import (
    clamp_number,
    format_compact,
    format_currency,
    format_engineering,
    format_file_size,
    format_ordinal,
    format_percentage,
    format_range,
    format_ratio,
    format_significant,
    format_with_commas,
    humanize_number,
    is_valid_integer,
    is_valid_number,
    pluralize,
    round_number,
    shorten_number,
)
from .objects import (
    deep_clone,
    deep_merge,
    filter_object,
    from_pairs,
    get_path,
    has_path,
    invert,
    is_equal,
    map_values,
    object_size,
    omit,
    pick,
    set_path,
    to_pairs,
    transform_keys,
    transform_values,
)
from .objects import is_empty as is_empty_object
from .strings import (
    camel_to_kebab,
    camel_to_snake,
    capitalize,
    escape_html,
    is_palindrome,
    kebab_to_camel,
    mask_string,
    random_string,
    reverse,
    slugify,
    snake_to_camel,
    strip_html,
    to_title_case,
    truncate,
    unescape_html,
    word_count,
)
from .strings import is_empty as is_empty_string
from .validation import (
    CardCheck,
    IsbnCheck,
    PasswordPolicy,
    PasswordReport,
    is_valid_credit_card,
    is_valid_date,
    is_valid_email,
    is_valid_hex_color,
    is_valid_ip,
    is_valid_isbn,
    is_valid_json,
    is_valid_phone,
    is_valid_postal_code,
    is_valid_ssn,
    is_valid_url,
    is_valid_uuid,
    validate_password,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = resources.files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    # namespaces
    "arrays",
    "crypto",
    "dates",
    "files",
    "numbers",
    "objects",
    "strings",
    "validation",
    # errors
    "FriendlyfyError",
    "InvalidInput",
    "OperationFailed",
    # locale engines
    "LocaleEngine",
    "EnglishEngine",
    "BabelEngine",
    "engine_for",
    "to_instant",
    # dates
    "DurationOptions",
    "time_ago",
    "time_from_now",
    "time_ago_with_precision",
    "time_from_now_with_precision",
    "format_duration",
    "start_of",
    "end_of",
    "format_date",
    "humanize_date",
    "format_date_with_timezone",
    # numbers
    "shorten_number",
    "humanize_number",
    "round_number",
    "format_with_commas",
    "format_currency",
    "format_percentage",
    "format_compact",
    "format_file_size",
    "format_ordinal",
    "format_range",
    "pluralize",
    "format_ratio",
    "format_significant",
    "format_engineering",
    "is_valid_number",
    "is_valid_integer",
    "clamp_number",
    # validation
    "CardCheck",
    "IsbnCheck",
    "PasswordPolicy",
    "PasswordReport",
    "is_valid_credit_card",
    "is_valid_isbn",
    "is_valid_ssn",
    "is_valid_email",
    "is_valid_url",
    "is_valid_phone",
    "validate_password",
    "is_valid_ip",
    "is_valid_date",
    "is_valid_json",
    "is_valid_uuid",
    "is_valid_hex_color",
    "is_valid_postal_code",
    # strings
    "slugify",
    "truncate",
    "capitalize",
    "to_title_case",
    "camel_to_kebab",
    "kebab_to_camel",
    "snake_to_camel",
    "camel_to_snake",
    "strip_html",
    "escape_html",
    "unescape_html",
    "random_string",
    "mask_string",
    "is_empty_string",
    "word_count",
    "reverse",
    "is_palindrome",
    # arrays
    "ArrayStats",
    "chunk",
    "unique",
    "shuffle",
    "random_item",
    "group_by",
    "flatten",
    "intersection",
    "difference",
    "union",
    "sort_by",
    "array_stats",
    "compact",
    "last",
    "first",
    "sample",
    "zip_lists",
    "unzip_lists",
    # objects
    "deep_clone",
    "deep_merge",
    "pick",
    "omit",
    "get_path",
    "set_path",
    "has_path",
    "transform_keys",
    "transform_values",
    "invert",
    "object_size",
    "is_empty_object",
    "from_pairs",
    "to_pairs",
    "map_values",
    "filter_object",
    "is_equal",
    # crypto
    "ScryptParams",
    "hash_string",
    "hmac_string",
    "secure_random_string",
    "generate_random_bytes",
    "generate_uuid",
    "generate_token",
    "hash_password",
    "verify_password",
    "xor_encrypt",
    "xor_decrypt",
    "generate_api_key",
    "generate_session_id",
    "generate_csrf_token",
    "verify_csrf_token",
    "secure_random_int",
    "generate_password_reset_token",
    "generate_email_verification_token",
    # files
    "FileStats",
    "DirEntryInfo",
    "get_file_extension",
    "get_filename_without_extension",
    "is_absolute_path",
    "normalize_path",
    "join_paths",
    "get_relative_path",
    "get_dirname",
    "get_basename",
    "file_exists",
    "dir_exists",
    "is_file",
    "is_directory",
    "get_file_stats",
    "read_file",
    "write_file",
    "create_dir",
    "delete_file",
    "delete_dir",
    "list_dir",
    "copy_file",
    "move_file",
    "get_file_size",
    "get_mime_type",
    "sanitize_filename",
    "docs",
]

# Common utilities
from .config_loader import load_config, load_parser_settings, load_parsing_config
from .csv_utils import configure_csv, read_csv, write_csv
from .log_config import setup_logging
from .text_utils import (
    NOT_FOUND,
    clean_source_field,
    count_marker,
    find_all_markers,
    find_marker,
    parse_count,
    parse_money,
    slice_bounded,
    strip_grouping,
)

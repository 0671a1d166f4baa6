from .errors import DecodeError, FormatError, ProcNetError, TableIOError
from .models import Address, Entry, FilterCriteria, Mode
from .collectors import collect, get_conn, get_tcp, get_tcp6, get_udp, get_udp6, parse_table, path_for_mode, read_table
from .rules import filter_entries, load_criteria

__version__ = "0.1.0"

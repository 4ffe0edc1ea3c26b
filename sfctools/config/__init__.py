# Configuration
from .dump_config import DumpConfig

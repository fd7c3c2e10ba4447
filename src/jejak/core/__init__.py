from .file_system import FileSystem
from .toml_serializer import TomlSerializer
from .config import Config, Preset
from .store import ActivityNotFoundError, ActivityStore, UNCHANGED
from .workspace import Workspace

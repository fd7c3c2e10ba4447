import os
from pathlib import Path


class FileSystem:
    ROOT_NAME = ".jejak"
    ENV_VAR = "JEJAK_DIR"
    CONFIG_NAME = "config.toml"
    DATABASE_NAME = "activities.db"

    def __init__(self, working_dir: Path | None = None):
        self.working_dir = working_dir or Path.cwd()

        self.JEJAK_DIR = self.find_jejak_dir()
        self.CONFIG_PATH = self.JEJAK_DIR / self.CONFIG_NAME
        self.DATABASE_PATH = self.JEJAK_DIR / self.DATABASE_NAME

    def find_jejak_dir(self) -> Path:
        """
        Locate the `.jejak` directory, honouring $JEJAK_DIR before searching upwards.
        """
        override = os.getenv(self.ENV_VAR)
        if override:
            path = Path(override)
            if not path.is_dir():
                raise FileNotFoundError(f"{self.ENV_VAR} points at {path}, which is not a directory.")
            return path
        return self.find_root(self.working_dir) / self.ROOT_NAME

    @classmethod
    def find_root(cls, search_start: Path) -> Path:
        """
        Search upwards from a given path for a `.jejak` directory.

        Args:
            search_start (Path): The path to start searching from.

        Returns:
            Path: The path to the directory containing `.jejak`.

        Raises:
            FileNotFoundError: If no `.jejak` directory is found in the path hierarchy.
        """
        possible_root = Path(search_start).absolute()

        while True:
            if (possible_root / cls.ROOT_NAME).is_dir():
                return possible_root
            next_possible_root = possible_root.parent
            if next_possible_root == possible_root:
                raise FileNotFoundError(
                    f"No {cls.ROOT_NAME} directory found from start {search_start}.")
            possible_root = next_possible_root

    @classmethod
    def initialise_repo(cls, target: Path, config_text: str, force: bool = False) -> Path:
        """
        Create `<target>/.jejak` with a config file. The database is created on first use.
        Refuses to run if the directory exists, or, unless forced, if a parent already has one.
        """
        jejak_dir = Path(target) / cls.ROOT_NAME
        if jejak_dir.exists():
            raise FileExistsError(f"jejak is already initialized at {jejak_dir}.")

        if not force:
            try:
                parent_root = cls.find_root(Path(target).absolute().parent)
            except FileNotFoundError:
                parent_root = None
            if parent_root is not None:
                raise FileExistsError(
                    f"A parent directory ({parent_root}) already contains {cls.ROOT_NAME}. Use --force to nest.")

        jejak_dir.mkdir(parents=True)
        (jejak_dir / cls.CONFIG_NAME).write_text(config_text)
        return jejak_dir

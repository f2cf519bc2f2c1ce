"""
Processor base classes

Simple processor pattern: each processor handles one file-to-file job.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from ...common.exceptions import ValidationError
from ...infrastructure.logging import get_logger


@dataclass
class ProcessorConfig:
    """Processor configuration"""
    enabled: bool = True
    name: str = ""

    def __post_init__(self):
        if not self.name:
            self.name = self.__class__.__name__


class BaseProcessor(ABC):
    """Processor base class

    Subclasses implement ``process_file`` and ``get_display_name`` and may
    override ``_initialize_impl`` for setup that can fail.
    """

    def __init__(self, config: ProcessorConfig):
        self.config = config
        self.stats: Dict[str, Any] = {}
        self._is_initialized = False
        self._init_error: str = ""

    def initialize(self) -> bool:
        """Initialize the processor, returning False on failure"""
        try:
            self._initialize_impl()
            self._is_initialized = True
            self._init_error = ""
            return True
        except Exception as e:
            self._init_error = str(e)
            get_logger("processor").error(f"Processor initialization failed: {e}")
            return False

    def _initialize_impl(self):
        """Initialization hook for subclasses"""
        pass

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def initialization_error(self) -> str:
        return self._init_error

    @abstractmethod
    def process_file(self, input_path: Union[str, Path], output_path: Union[str, Path]):
        """Process one input file into one output file"""
        pass

    @abstractmethod
    def get_display_name(self) -> str:
        """User-facing processor name"""
        pass

    def get_description(self) -> str:
        return f"{self.get_display_name()} processor"

    def validate_inputs(self, input_path: Union[str, Path], output_path: Union[str, Path]) -> bool:
        """Check the input exists and prepare the output directory"""
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file does not exist: {input_path}")
        if not input_path.is_file():
            raise ValidationError(f"Input path is not a file: {input_path}", field_name="input_path")
        if input_path.resolve() == Path(output_path).resolve():
            raise ValidationError("Output path must differ from the input path", field_name="output_path")

        output_dir = Path(output_path).parent
        if not output_dir.exists():
            output_dir.mkdir(parents=True, exist_ok=True)

        return True

    def reset_stats(self):
        self.stats.clear()

"""Runtime support for API models: builders, descriptors and serialization."""

from .builder import BuilderAlreadyUsed as BuilderAlreadyUsed
from .builder import MissingRequiredField as MissingRequiredField
from .builder import ObjectBuilder as ObjectBuilder
from .codecs import BOOLEAN as BOOLEAN
from .codecs import FLOAT as FLOAT
from .codecs import INTEGER as INTEGER
from .codecs import JSON_DATA as JSON_DATA
from .codecs import STRING as STRING
from .codecs import Codec as Codec
from .codecs import enum_codec as enum_codec
from .codecs import model_codec as model_codec
from .helpers import disable_required_checks as disable_required_checks
from .helpers import is_defined as is_defined
from .helpers import required_checks_disabled as required_checks_disabled
from .helpers import reset_list as reset_list
from .helpers import reset_map as reset_map
from .model import ModelDefinitionError as ModelDefinitionError
from .model import ObjectModel as ObjectModel
from .model import api_field as api_field
from .model import get_model as get_model
from .model import list_field as list_field
from .model import map_field as map_field
from .model import registered_models as registered_models
from .model import variant as variant
from .serialization import UnrecognizedWireValue as UnrecognizedWireValue
from .serialization import deserialize as deserialize
from .serialization import encode_params as encode_params
from .serialization import serialize as serialize
from .tokens import Event as Event
from .tokens import JsonGenerator as JsonGenerator
from .tokens import JsonParser as JsonParser
from .tokens import ValueGenerator as ValueGenerator
from .tokens import ValueParser as ValueParser
from .types import Cardinality as Cardinality
from .types import FieldDescriptor as FieldDescriptor
from .types import Location as Location
from .types import ModelInfo as ModelInfo

"""persondb - declarative management of records in a persons database."""

from .blueprints import Blueprint as Blueprint
from .client import Client as Client
from .client import PersonStore as PersonStore
from .config import ProviderConfig as ProviderConfig
from .context import Context as Context
from .datasources import NamesDataSource as NamesDataSource
from .datasources import PersonDataSource as PersonDataSource
from .models import PersonDataModel as PersonDataModel
from .models import PersonLookup as PersonLookup
from .models import PersonModel as PersonModel
from .provider import Provider as Provider
from .resources import PersonResource as PersonResource
from .spec import ImportSpec as ImportSpec
from .spec import ResourceSpec as ResourceSpec
from .spec import Specification as Specification
from .specop import Absent as Absent
from .specop import Ensure as Ensure
from .specop import Import as Import
from .specop import Present as Present
from .specop import SpecOp as SpecOp
from .stacks import Stack as Stack
from .state import State as State
from .workspace import Workspace as Workspace

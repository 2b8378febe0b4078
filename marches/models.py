# Import other models so Django can discover them
from .common.models import BaseModel  # noqa
from .procedures.models import Procedure  # noqa

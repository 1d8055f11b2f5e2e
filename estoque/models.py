# Central models file - import every table model so metadata knows about it

from estoque.setores.models import Setor  # noqa: F401
from estoque.auth.models import User  # noqa: F401
from estoque.datatables.models import DataTable, DataTableRow  # noqa: F401
from estoque.catalog.models import ProductRecord  # noqa: F401

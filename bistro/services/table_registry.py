from typing import List, Optional

from bistro.schemas.dine_in import Table, TableStatus

class TableNotFoundError(LookupError):
    pass

class TableRegistry:
    """Fixed set of dining tables numbered from 1.

    Occupancy is kept consistent by the dine-in session, not by the registry.
    """
    
    def __init__(self, count: int):
        if count < 1:
            raise ValueError("a registry needs at least one table")
        self.count = count
        self._tables: List[Table] = []
        self.reset()
    
    def reset(self) -> None:
        self._tables = [Table(number=n) for n in range(1, self.count + 1)]
    
    def all(self) -> List[Table]:
        return list(self._tables)
    
    def find_by_number(self, number: int) -> Optional[Table]:
        for table in self._tables:
            if table.number == number:
                return table
        return None
    
    def set_status(self, number: int, status: TableStatus) -> Table:
        table = self.find_by_number(number)
        if table is None:
            raise TableNotFoundError(f"Table {number} does not exist")
        table.status = status
        return table

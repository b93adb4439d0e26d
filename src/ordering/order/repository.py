"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """All orders of a customer, newest first.

        The listing is unbounded; ``limit(None)`` lifts the default page size.
        """
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .limit(None)
            .all()
            .items
        )

from dataclasses import dataclass
from typing import List


@dataclass
class NotationDocumentFixture:
    """Fixture pairing a notation document with the literals tests assert on."""

    name: str
    # Notation source text
    source: str
    # Table names in document order
    tables: List[str]
    # Column count per table, same order as ``tables``
    column_counts: List[int]


ECOMMERCE_FIXTURE = NotationDocumentFixture(
    name="ecommerce",
    source="""// Schema: shop
// @version: 3

// @schema: sales
// @description: Registered customers
// UNIQUE(first_name, last_name)
interface Customers {
  id: int;                  // PRIMARY KEY, AUTO_INCREMENT
  email: string(255);       // UNIQUE, @format: email
  first_name: string(100);
  last_name: string(100);
  phone?: string(20);
  created_at: datetime;     // DEFAULT CURRENT_TIMESTAMP
}

// @description: Customer orders
interface Orders {
  id: int;                  // PK
  customer_id: int;         // FK -> sales.Customers(id), ON DELETE CASCADE
  status: 'pending' | 'shipped' | 'delivered';  // DEFAULT 'pending'
  priority: -1 | 0 | 1;
  tags?: string[];
  total: decimal;           // CHECK IN (0, 1)
  // INDEX(customer_id, status)
}
""",
    tables=["Customers", "Orders"],
    column_counts=[6, 6],
)

QUOTED_FIXTURE = NotationDocumentFixture(
    name="quoted",
    source="""interface `Order Items` {
  `line id`: int;           // PRIMARY KEY
  `weird``name`?: text;
  `order id`: int;          // FK -> `Order Headers`(`header id`)
}
""",
    tables=["Order Items"],
    column_counts=[3],
)

ALL_FIXTURES = [ECOMMERCE_FIXTURE, QUOTED_FIXTURE]

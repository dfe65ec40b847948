# stockroom

Data-access and business-logic layers for a warehouse inventory.
Each area has a repository, which runs SQL against a DB-API 2.0
connection, and a service, which applies the business rules on top of a
repository.

## Areas

| Area            | Module pair                                                   | Repository                | Service                |
|-----------------|---------------------------------------------------------------|---------------------------|------------------------|
| Products        | `product_repository`, `product_service`                       | `ProductRepository`       | `ProductService`       |
| Product batches | `product_batch_repository`, `product_batch_service`           | `ProductBatchRepository`  | `ProductBatchService`  |
| Product records | `product_record_repository`, `product_record_service`         | `ProductRecordRepository` | `ProductRecordService` |
| Sections        | `section_repository`, `section_service`                       | `SectionRepository`       | `SectionService`       |
| Record reports  | `report_record_repository`, `report_record_service`           | `ReportRecordRepository`  | `ReportRecordService`  |

Records are dataclasses defined in the repository modules: `Product`,
`ProductBatch`, `ProductRecord`, `Section`, `ProductsBySection` and
`ReportRecord`.

## Usage

```python
from stockroom.product_repository import Product, ProductRepository
from stockroom.product_service import AlreadyExistsError, ProductService

service = ProductService(ProductRepository(connection))

try:
    created = service.save(Product(description="Tomatoes", product_code="TOM-001",
                                   product_type_id=3, seller_id=5))
except AlreadyExistsError:
    ...

# Empty strings, zero numbers and a missing seller leave stored values unchanged.
updated = service.partial_update(created.id, Product(description="Cherry tomatoes"))
```

`connection` is any DB-API 2.0 connection whose driver uses `?`
placeholders. Repositories open a cursor per call and commit after each
successful write.

## Business rules

- `ProductService.save` refuses a product code that is already stored;
  `partial_update` checks a changed product code the same way.
- `ProductBatchService.create` stores a batch and returns it with its new id.
- `ProductRecordService.save` refuses a `last_update_date` earlier than
  the start of today, then returns the record as stored.
- `SectionService.create` refuses a section number already in use.
  `SectionService.update` changes only non-zero fields, and temperatures
  only when above -273. `SectionService.exists` raises
  `AlreadyExistsError` rather than returning a flag.
  `SectionService.get_section_products(0)` counts products in every
  section; any other id counts only that section.
- `ReportRecordService.get()` returns the record count of every product;
  `get(product_id)` returns a one-element list for that product.

## Errors

Each module defines its own exceptions, for example
`stockroom.product_repository.NotFoundError` and
`stockroom.product_service.NotFoundError`. Most services translate
repository errors into their own; `ProductBatchService` and
`SectionService` pass the repository's exceptions through.

Driver errors that carry a MySQL error number are mapped to specific
exceptions: foreign-key violations (1452), duplicate entries (1062) and,
for product batches, invalid date values (1292). `stockroom.database`
provides `MySQLError` and `mysql_error_number`, which reads the number
from a `MySQLError`, from an `errno` attribute or from the first
exception argument.

## What this package does not do

It does not handle purchase orders, expose an HTTP API, run a server, or
create the database schema. The tables it queries must already exist,
and the caller supplies and owns the connection.

## Tests

Install with the `test` extra and run `pytest`.
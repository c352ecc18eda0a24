# productsvc

A small HTTP service for managing a product catalogue. Products and product
categories live in a SQL database; single-product lookups are cached in Redis.

## Configuration

Settings are read from a dotenv file. Environment variables with the same
names take precedence over the file.

```
APP_PORT=8080

DB_DRIVER=postgres
DB_HOST=localhost
DB_PORT=5432
DB_USER=user
DB_PASSWORD=password
DB_NAME=product

REDIS_HOST=localhost
REDIS_PORT=6379
REDIS_PASSWORD=password
```

`DB_DRIVER` may be left empty or set to `postgres`, `postgresql` or `pgx` for
PostgreSQL (connected with `sslmode=disable`), set to `sqlite` (then `DB_NAME`
is the database file), or name any other SQLAlchemy driver. The matching
database driver package must be installed separately. An empty `REDIS_HOST`
or `REDIS_PORT` means `localhost` and `6379`.

## Running

```
productsvc
```

By default the settings are read from `.env` in the current directory;
`--env-file PATH` names another file, or a directory holding `.env`.

On start-up the command connects to Redis and to the database. If the
settings file is missing, either connection fails, or `APP_PORT` is not a
number, it prints the error and exits with status 1. Otherwise it serves on
all interfaces at `APP_PORT`.

## HTTP API

Every request gets a fresh request id and, once handled, is logged with its
host, method, path, status and latency ("Request success." for 200 and 201,
"Request Error." otherwise).

### Products

`GET /v1/product/<id>` returns one product:

```json
{"message": "Success", "product": {"id": 1, "name": "Lamp", "description": "Desk lamp", "price": 25.0, "stock": 4, "category_id": 2}}
```

The product is looked up in Redis first (key `product:<id>`); on a miss it is
read from the database and written to the cache in a background thread for
five minutes. A Redis failure is logged and the database is used instead. An
id that is not a 64-bit integer gives `400` with `"Invalid Product ID"`; a
product that cannot be found or read gives `500` with the error text.

`POST /v1/product` manages products. The JSON body carries an `action` and the
product fields:

| action   | needs `id` | effect                                          |
|----------|------------|-------------------------------------------------|
| `add`    | no         | creates the product, reports its id             |
| `edit`   | yes        | saves every field (creating the row if absent), returns it |
| `delete` | yes        | deletes the product                             |

A body that is not valid JSON or has fields of the wrong type gives `400`
with `"Invalid Input"`; a missing action, a missing id for `edit`/`delete` or
an unknown action also gives `400` with an `error_message`. Storage errors
give `500`.

### Product categories

`GET /v1/product-category/<id>` and `POST /v1/product-category` work the same
way for categories, whose fields are `id` and `name`. Category lookups go
straight to the database.

### Search

`GET /v1/product/search` accepts these query parameters:

| parameter   | default         | meaning                                    |
|-------------|-----------------|--------------------------------------------|
| `name`      |                 | case-insensitive substring of the name     |
| `category`  |                 | exact category name                        |
| `min_price` |                 | lower price bound, used when above zero    |
| `max_price` |                 | upper price bound, used when above zero    |
| `page`      | `1`             | page number                                |
| `page_size` | `10`            | products per page                          |
| `order_by`  | `product.name`  | column to order by                         |
| `sort`      | `ASC`           | `ASC` or `DESC`; anything else means `ASC` |

Only products whose category exists are found. Unparseable numbers count as
zero; a `page_size` of zero gives `500`. The answer is wrapped in `data` and
holds `products`, `page`, `page_size`, `total_count`, `total_pages` and
`next_page_url`, which points at the following page and is `null` on the last
one. A failed search is reported with status `200` and an `error_message`.

## Using it as a library

The service is built in layers that can be assembled by hand, for example to
point it at a different database or to test it:

- `productsvc.config.load_config` reads the settings into a `Config`
  (raising `ConfigError` when the file cannot be read).
- `productsvc.resources.build_database_url` turns the settings into a
  SQLAlchemy URL; `init_db` and `init_redis` open and check the connections,
  raising `ConnectionError` on failure.
- `productsvc.repository.create_schema` creates the `product` and
  `product_category` tables.
- `ProductRepository` (in `productsvc.repository`), `ProductService`,
  `ProductUsecase` and `ProductHandler` stack on top of each other. Lookups of
  missing records raise `RecordNotFoundError`. `ProductService` takes a
  `run_in_background` callable that decides how the cache write-back runs.
- `productsvc.app.create_app` turns a `ProductHandler` into a Flask
  application with all routes and the request logger installed.
- `productsvc.logger.setup_logger` and `get_logger` give the coloured service
  logger.

## What it does not do

- The `productsvc` command does not create the database tables; create them
  beforehand, for instance with `create_schema`.
- There is no authentication: every endpoint is open.
- Category lookups are not cached, although the repository has methods for
  caching categories.

## Tests

Install the `test` extra and run pytest from the project root.
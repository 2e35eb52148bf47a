"""Abstract column type registry.

Every logical column kind is a member of :class:`AbstractColumnType`. A
member is either shared (``dialect is None``) or owned by exactly one
dialect, so adding an extension for one backend never disturbs existing
members. Display names are embedded in generated code and must never change.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Final

from .dialects import Dialect

UNKNOWN_TYPE_NAME: Final[str] = "UNKNOWN"


class AbstractColumnType(Enum):
    """Closed set of abstract column types: shared kinds plus dialect extensions."""

    # Shared types
    VARCHAR = (None, "VARCHAR")
    CHAR = (None, "CHAR")
    TEXT = (None, "TEXT")
    TINYINT = (None, "TINYINT")
    SMALLINT = (None, "SMALLINT")
    INT = (None, "INT")
    BIGINT = (None, "BIGINT")
    BOOLEAN = (None, "BOOLEAN")
    REAL = (None, "REAL")
    DOUBLE = (None, "DOUBLE")
    DECIMAL = (None, "DECIMAL")
    DATE = (None, "DATE")
    TIME = (None, "TIME")
    DATETIME = (None, "DATETIME")
    TIMESTAMP = (None, "TIMESTAMP")
    BLOB = (None, "BLOB")
    JSON = (None, "JSON")
    UUID = (None, "UUID")
    BIT = (None, "BIT")
    BINARY = (None, "BINARY")
    VARBINARY = (None, "VARBINARY")
    MONEY = (None, "MONEY")
    XML = (None, "XML")

    # PostgreSQL
    POSTGRES_JSONB = (Dialect.POSTGRESQL, "JSONB")
    POSTGRES_HSTORE = (Dialect.POSTGRESQL, "HSTORE")
    POSTGRES_TSVECTOR = (Dialect.POSTGRESQL, "TSVECTOR")
    POSTGRES_MONEY = (Dialect.POSTGRESQL, "MONEY")
    POSTGRES_INTERVAL = (Dialect.POSTGRESQL, "INTERVAL")
    POSTGRES_INET = (Dialect.POSTGRESQL, "INET")
    POSTGRES_MACADDR = (Dialect.POSTGRESQL, "MACADDR")
    POSTGRES_MACADDR8 = (Dialect.POSTGRESQL, "MACADDR8")
    POSTGRES_BIT = (Dialect.POSTGRESQL, "BIT")
    POSTGRES_VARBIT = (Dialect.POSTGRESQL, "VARBIT")
    POSTGRES_BOX = (Dialect.POSTGRESQL, "BOX")
    POSTGRES_CIRCLE = (Dialect.POSTGRESQL, "CIRCLE")
    POSTGRES_LINE = (Dialect.POSTGRESQL, "LINE")
    POSTGRES_LSEG = (Dialect.POSTGRESQL, "LSEG")
    POSTGRES_PATH = (Dialect.POSTGRESQL, "PATH")
    POSTGRES_POLYGON = (Dialect.POSTGRESQL, "POLYGON")
    POSTGRES_TSQUERY = (Dialect.POSTGRESQL, "TSQUERY")
    POSTGRES_JSONPATH = (Dialect.POSTGRESQL, "JSONPATH")
    POSTGRES_XML = (Dialect.POSTGRESQL, "XML")
    POSTGRES_ARRAY = (Dialect.POSTGRESQL, "ARRAY")
    POSTGRES_RANGE = (Dialect.POSTGRESQL, "RANGE")
    POSTGRES_MULTIRANGE = (Dialect.POSTGRESQL, "MULTIRANGE")
    POSTGRES_PG_LSN = (Dialect.POSTGRESQL, "PG_LSN")
    POSTGRES_PG_SNAPSHOT = (Dialect.POSTGRESQL, "PG_SNAPSHOT")

    # MySQL / MariaDB
    MYSQL_SET = (Dialect.MYSQL, "SET")
    MYSQL_ENUM = (Dialect.MYSQL, "ENUM")
    MYSQL_POINT = (Dialect.MYSQL, "POINT")
    MYSQL_TINYTEXT = (Dialect.MYSQL, "TINYTEXT")
    MYSQL_MEDIUMTEXT = (Dialect.MYSQL, "MEDIUMTEXT")
    MYSQL_LONGTEXT = (Dialect.MYSQL, "LONGTEXT")
    MYSQL_TINYBLOB = (Dialect.MYSQL, "TINYBLOB")
    MYSQL_MEDIUMBLOB = (Dialect.MYSQL, "MEDIUMBLOB")
    MYSQL_LONGBLOB = (Dialect.MYSQL, "LONGBLOB")
    MYSQL_YEAR = (Dialect.MYSQL, "YEAR")
    MYSQL_GEOMETRY = (Dialect.MYSQL, "GEOMETRY")
    MYSQL_LINESTRING = (Dialect.MYSQL, "LINESTRING")
    MYSQL_POLYGON = (Dialect.MYSQL, "POLYGON")
    MYSQL_MULTIPOINT = (Dialect.MYSQL, "MULTIPOINT")
    MYSQL_MULTILINESTRING = (Dialect.MYSQL, "MULTILINESTRING")
    MYSQL_MULTIPOLYGON = (Dialect.MYSQL, "MULTIPOLYGON")
    MYSQL_GEOMETRYCOLLECTION = (Dialect.MYSQL, "GEOMETRYCOLLECTION")

    # SQL Server
    SQLSERVER_XML = (Dialect.SQLSERVER, "XML")
    SQLSERVER_GEOGRAPHY = (Dialect.SQLSERVER, "GEOGRAPHY")
    SQLSERVER_GEOMETRY = (Dialect.SQLSERVER, "GEOMETRY")
    SQLSERVER_HIERARCHYID = (Dialect.SQLSERVER, "HIERARCHYID")
    SQLSERVER_UNIQUEIDENTIFIER = (Dialect.SQLSERVER, "UNIQUEIDENTIFIER")
    SQLSERVER_IMAGE = (Dialect.SQLSERVER, "IMAGE")
    SQLSERVER_NTEXT = (Dialect.SQLSERVER, "NTEXT")
    SQLSERVER_SQL_VARIANT = (Dialect.SQLSERVER, "SQL_VARIANT")
    SQLSERVER_TIMESTAMP = (Dialect.SQLSERVER, "TIMESTAMP")
    SQLSERVER_MONEY = (Dialect.SQLSERVER, "MONEY")
    SQLSERVER_SMALLMONEY = (Dialect.SQLSERVER, "SMALLMONEY")
    SQLSERVER_DATETIME2 = (Dialect.SQLSERVER, "DATETIME2")
    SQLSERVER_DATETIMEOFFSET = (Dialect.SQLSERVER, "DATETIMEOFFSET")
    SQLSERVER_SMALLDATETIME = (Dialect.SQLSERVER, "SMALLDATETIME")

    # CQL (Cassandra)
    CQL_COUNTER = (Dialect.CQL, "COUNTER")
    CQL_DURATION = (Dialect.CQL, "DURATION")
    CQL_INET = (Dialect.CQL, "INET")
    CQL_LIST = (Dialect.CQL, "LIST")
    CQL_MAP = (Dialect.CQL, "MAP")
    CQL_SET = (Dialect.CQL, "SET")
    CQL_TUPLE = (Dialect.CQL, "TUPLE")
    CQL_VECTOR = (Dialect.CQL, "VECTOR")

    # ClickHouse
    CLICKHOUSE_LOW_CARDINALITY = (Dialect.CLICKHOUSE, "LowCardinality")
    CLICKHOUSE_NULLABLE = (Dialect.CLICKHOUSE, "Nullable")
    CLICKHOUSE_ARRAY = (Dialect.CLICKHOUSE, "Array")
    CLICKHOUSE_MAP = (Dialect.CLICKHOUSE, "Map")
    CLICKHOUSE_TUPLE = (Dialect.CLICKHOUSE, "Tuple")
    CLICKHOUSE_NESTED = (Dialect.CLICKHOUSE, "Nested")
    CLICKHOUSE_ENUM8 = (Dialect.CLICKHOUSE, "Enum8")
    CLICKHOUSE_ENUM16 = (Dialect.CLICKHOUSE, "Enum16")
    CLICKHOUSE_DATE32 = (Dialect.CLICKHOUSE, "Date32")
    CLICKHOUSE_DATETIME64 = (Dialect.CLICKHOUSE, "DateTime64")
    CLICKHOUSE_IPV4 = (Dialect.CLICKHOUSE, "IPv4")
    CLICKHOUSE_IPV6 = (Dialect.CLICKHOUSE, "IPv6")
    CLICKHOUSE_OBJECT_JSON = (Dialect.CLICKHOUSE, "Object('json')")
    CLICKHOUSE_DECIMAL32 = (Dialect.CLICKHOUSE, "Decimal32")
    CLICKHOUSE_DECIMAL64 = (Dialect.CLICKHOUSE, "Decimal64")
    CLICKHOUSE_DECIMAL128 = (Dialect.CLICKHOUSE, "Decimal128")
    CLICKHOUSE_DECIMAL256 = (Dialect.CLICKHOUSE, "Decimal256")
    CLICKHOUSE_AGGREGATE_FUNCTION = (Dialect.CLICKHOUSE, "AggregateFunction")
    CLICKHOUSE_SIMPLE_AGGREGATE_FUNCTION = (Dialect.CLICKHOUSE, "SimpleAggregateFunction")

    # Presto
    PRESTO_ROW = (Dialect.PRESTO, "ROW")
    PRESTO_ARRAY = (Dialect.PRESTO, "ARRAY")
    PRESTO_MAP = (Dialect.PRESTO, "MAP")
    PRESTO_INTERVAL_YEAR_TO_MONTH = (Dialect.PRESTO, "INTERVAL YEAR TO MONTH")
    PRESTO_INTERVAL_DAY_TO_SECOND = (Dialect.PRESTO, "INTERVAL DAY TO SECOND")
    PRESTO_IPADDRESS = (Dialect.PRESTO, "IPADDRESS")
    PRESTO_GEOMETRY = (Dialect.PRESTO, "GEOMETRY")
    PRESTO_BING_TILE = (Dialect.PRESTO, "BING_TILE")
    PRESTO_HYPERLOGLOG = (Dialect.PRESTO, "HYPERLOGLOG")
    PRESTO_P4HYPERLOGLOG = (Dialect.PRESTO, "P4HYPERLOGLOG")
    PRESTO_QDIGEST = (Dialect.PRESTO, "QDIGEST")
    PRESTO_TDIGEST = (Dialect.PRESTO, "TDIGEST")
    PRESTO_BARCODE = (Dialect.PRESTO, "BARCODE")
    PRESTO_TIME_WITH_TIME_ZONE = (Dialect.PRESTO, "TIME WITH TIME ZONE")
    PRESTO_TIMESTAMP_WITH_TIME_ZONE = (Dialect.PRESTO, "TIMESTAMP WITH TIME ZONE")

    # Oracle
    ORACLE_NCLOB = (Dialect.ORACLE, "NCLOB")
    ORACLE_RAW = (Dialect.ORACLE, "RAW")
    ORACLE_BINARY_FLOAT = (Dialect.ORACLE, "BINARY_FLOAT")
    ORACLE_BINARY_DOUBLE = (Dialect.ORACLE, "BINARY_DOUBLE")
    ORACLE_INTERVAL_YEAR_TO_MONTH = (Dialect.ORACLE, "INTERVAL YEAR TO MONTH")
    ORACLE_INTERVAL_DAY_TO_SECOND = (Dialect.ORACLE, "INTERVAL DAY TO SECOND")
    ORACLE_UROWID = (Dialect.ORACLE, "UROWID")
    ORACLE_ANYDATA = (Dialect.ORACLE, "ANYDATA")
    ORACLE_ANYTYPE = (Dialect.ORACLE, "ANYTYPE")
    ORACLE_ANYDATASET = (Dialect.ORACLE, "ANYDATASET")
    ORACLE_XMLTYPE = (Dialect.ORACLE, "XMLTYPE")
    ORACLE_URITYPE = (Dialect.ORACLE, "URITYPE")
    ORACLE_DBURITYPE = (Dialect.ORACLE, "DBURITYPE")
    ORACLE_XDBURITYPE = (Dialect.ORACLE, "XDBURITYPE")
    ORACLE_HTTPURITYPE = (Dialect.ORACLE, "HTTPURITYPE")
    ORACLE_SDO_GEOMETRY = (Dialect.ORACLE, "SDO_GEOMETRY")
    ORACLE_SDO_TOPO_GEOMETRY = (Dialect.ORACLE, "SDO_TOPO_GEOMETRY")
    ORACLE_SDO_GEORASTER = (Dialect.ORACLE, "SDO_GEORASTER")

    # Informix
    INFORMIX_LVARCHAR = (Dialect.INFORMIX, "LVARCHAR")
    INFORMIX_BYTE = (Dialect.INFORMIX, "BYTE")
    INFORMIX_MONEY = (Dialect.INFORMIX, "MONEY")
    INFORMIX_SERIAL = (Dialect.INFORMIX, "SERIAL")
    INFORMIX_SERIAL8 = (Dialect.INFORMIX, "SERIAL8")
    INFORMIX_BIGSERIAL = (Dialect.INFORMIX, "BIGSERIAL")
    INFORMIX_CLOB = (Dialect.INFORMIX, "CLOB")
    INFORMIX_INTERVAL = (Dialect.INFORMIX, "INTERVAL")
    INFORMIX_LIST = (Dialect.INFORMIX, "LIST")
    INFORMIX_MULTISET = (Dialect.INFORMIX, "MULTISET")
    INFORMIX_SET = (Dialect.INFORMIX, "SET")
    INFORMIX_ROW = (Dialect.INFORMIX, "ROW")

    def __init__(self, dialect: Dialect | None, display_name: str) -> None:
        self.dialect = dialect
        self.display_name = display_name

    @property
    def is_shared(self) -> bool:
        return self.dialect is None

    def __str__(self) -> str:
        return self.display_name


SHARED_TYPES: Final[tuple[AbstractColumnType, ...]] = tuple(
    member for member in AbstractColumnType if member.is_shared
)

NUMERIC_TYPES: Final[frozenset[AbstractColumnType]] = frozenset({
    AbstractColumnType.TINYINT,
    AbstractColumnType.SMALLINT,
    AbstractColumnType.INT,
    AbstractColumnType.BIGINT,
    AbstractColumnType.REAL,
    AbstractColumnType.DOUBLE,
    AbstractColumnType.DECIMAL,
    AbstractColumnType.MONEY,
    AbstractColumnType.INFORMIX_SERIAL,
    AbstractColumnType.INFORMIX_SERIAL8,
    AbstractColumnType.INFORMIX_BIGSERIAL,
    AbstractColumnType.CQL_COUNTER,
})


def name_of(column_type: Any) -> str:
    """Return the canonical display name, or ``UNKNOWN`` for foreign values."""
    if isinstance(column_type, AbstractColumnType):
        return column_type.display_name
    return UNKNOWN_TYPE_NAME


def identifier_of(column_type: AbstractColumnType) -> str:
    """Return the stable Python identifier of a type, e.g. ``POSTGRES_JSONB``."""
    return column_type.name


def lookup_identifier(identifier: str) -> AbstractColumnType | None:
    """Resolve an identifier such as ``VARCHAR`` or ``POSTGRES_JSONB``."""
    return AbstractColumnType.__members__.get(identifier)


def dialect_types(dialect: Dialect) -> tuple[AbstractColumnType, ...]:
    """Return the extension types owned by ``dialect``."""
    return tuple(member for member in AbstractColumnType if member.dialect is dialect)


def is_numeric(column_type: AbstractColumnType) -> bool:
    """Whether auto-increment is meaningful for the type."""
    return column_type in NUMERIC_TYPES

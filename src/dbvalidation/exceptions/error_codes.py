from enum import IntEnum


# https://dev.mysql.com/doc/mysql-errors/8.0/en/server-error-reference.html
class MySQLErrorCodes(IntEnum):
    ER_BAD_NULL_ERROR = 1048                    # Column '%s' cannot be null
    ER_DUP_ENTRY = 1062                         # Duplicate entry '%s' for key %d
    WARN_DATA_TRUNCATED = 1265                  # Data truncated for column '%s' at row %ld
    ER_TRUNCATED_WRONG_VALUE_FOR_FIELD = 1366   # Incorrect %s value: '%s' for column '%s' at row %ld
    ER_DATA_TOO_LONG = 1406                     # Data too long for column '%s' at row %ld

# Repositories package.
#
# Persistence adapters that turn ORM rows into domain records.  They
# never commit and never translate database errors; the transaction
# boundary belongs to the ``get_db`` dependency and faults propagate to
# the caller.

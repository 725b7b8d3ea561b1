# Services package.
#
#   user_service  — UserService: uniqueness-checked insert, existence-
#                   checked remove, lookups
#   results       — ServiceResult descriptors (code + payload) returned by
#                   every service call
#
# Services receive their repository through the constructor; the router
# builds one per request from the request-scoped AsyncSession so the
# ``get_db`` dependency still owns the transaction boundary.

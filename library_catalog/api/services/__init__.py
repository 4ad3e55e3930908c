# This file marks the services package for catalog data-access and lending logic modules.
# Routers depend on these service classes instead of issuing SQL themselves.

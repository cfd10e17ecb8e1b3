"""Menu catalog constants.

``MenuCategory`` is the closed set of kitchen stations.  It drives both
the grouping of the kitchen board and the preparation lead time of every
dish (see ``modules.kitchen.timing``).
"""

from django.db import models


class MenuCategory(models.TextChoices):
    ENTRADAS = "entradas", "Entradas"
    PLATOS_FUERTES = "platos_fuertes", "Platos Fuertes"
    COMPLEMENTOS = "complementos", "Complementos"
    POSTRES_BEBIDAS = "postres_bebidas", "Postres y Bebidas"


# Sauces are modelled as the variants of this one menu item.
SAUCES_ITEM_NAME = "Salsas"

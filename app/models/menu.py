from tortoise import fields, models


class MenuItem(models.Model):
    # Assigned from the menu item sequence on create, never by the database
    id = fields.IntField(primary_key=True, generated=False)
    name = fields.CharField(max_length=255)
    main_category = fields.CharField(max_length=128)
    menu_category = fields.CharField(max_length=128)
    description = fields.TextField(null=True)
    protein = fields.FloatField()
    web_price = fields.DecimalField(max_digits=12, decimal_places=2)
    third_party_price = fields.DecimalField(max_digits=12, decimal_places=2)
    in_house_price = fields.DecimalField(max_digits=12, decimal_places=2)
    # [{"ingredient_id": int, "quantity_needed": float}, ...]
    ingredients = fields.JSONField(default=list)
    # [{"id": int, "ingredient_id": int, "quantity_needed": float, "price": float}, ...]
    addons = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "menu_items"
        indexes = [
            ("main_category",),
            ("main_category", "menu_category"),
        ]

from tortoise import fields, models


class Ingredient(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    available_quantity = fields.IntField(default=0)
    low_stock_threshold = fields.IntField(default=0)
    updated_user = fields.CharField(max_length=255, null=True) # Audit: who touched the record last
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "ingredients"

    @property
    def is_low_stock(self) -> bool:
        return self.available_quantity <= self.low_stock_threshold

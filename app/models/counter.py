from tortoise import fields, models


class Counter(models.Model):
    """
    One row per named sequence. `value` is the last integer handed out;
    it is only ever changed by SequenceGenerator.next_value under a row lock.
    """
    name = fields.CharField(max_length=64, primary_key=True)
    value = fields.BigIntField(default=0)

    class Meta:
        table = "counters"

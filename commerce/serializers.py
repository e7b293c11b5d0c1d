from rest_framework import serializers

from commerce.models import Account, Order


class AccountSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["id", "first_name", "last_name", "email"]
        # Duplicate emails are reported by the repository as a conflict.
        extra_kwargs = {"email": {"validators": []}}


class OrderSerializer(serializers.ModelSerializer):
    # A plain key: account existence is the repository's not-found check.
    account_id = serializers.IntegerField()

    class Meta:
        model = Order
        fields = ["id", "account_id", "product", "quantity", "price"]


class AccountWithOrdersSerializer(serializers.Serializer):
    def to_representation(self, instance):
        data = AccountSerializer(instance.account).data
        data["orders"] = OrderSerializer(instance.orders, many=True).data
        return data

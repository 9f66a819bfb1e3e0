from rest_framework import serializers


class BlockRendererSerializer(serializers.Serializer):
    post_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    attributes = serializers.JSONField(required=False, default=dict)

    def validate_attributes(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("attributes must be a JSON object")
        return value

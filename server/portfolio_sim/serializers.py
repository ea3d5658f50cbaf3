from __future__ import annotations

from rest_framework import serializers

DATE_FORMATS = ["%Y-%m-%d"]

# paths are held as a (cycles, years*12 + 1) float64 array and sorted once more
# for the percentiles: at the caps that is about 240 MB, twice over
MAX_CYCLES = 50000
MAX_YEARS = 50


class AllocationSerializer(serializers.Serializer):
    allocation = serializers.FloatField(min_value=0.0, max_value=100.0)
    cagr = serializers.FloatField()
    volatility = serializers.FloatField(min_value=0.0)
    symbol = serializers.CharField(required=False, allow_blank=True, max_length=32)


class DepositSerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=DATE_FORMATS)
    amount = serializers.FloatField()


class SimulationRequestSerializer(serializers.Serializer):
    # emptiness is reported by the core as "No allocations provided"
    allocations = AllocationSerializer(many=True, required=False)
    oneTimeDeposits = DepositSerializer(many=True, required=False)
    monthlyChanges = DepositSerializer(many=True, required=False)
    cycles = serializers.IntegerField(required=False, allow_null=True, max_value=MAX_CYCLES)
    years = serializers.IntegerField(required=False, allow_null=True, max_value=MAX_YEARS)

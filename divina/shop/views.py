import logging
from decimal import Decimal, InvalidOperation
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from divina.core.permissions import IsAdmin
from divina.core.utils import create_audit_log
from .models import ShippingZone
from .serializers import ShippingZoneSerializer
from .services import ShippingZoneNotFound, calculate_shipping

logger = logging.getLogger('divina.shop')


@api_view(['GET'])
@permission_classes([AllowAny])
def shipping_calculate(request):
    """Shipping cost for a destination: GET ?country=SK&subtotal=42.50"""
    country = request.query_params.get('country', '').strip().upper()
    if not country:
        return Response({'error': 'Country code is required'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        subtotal = Decimal(request.query_params.get('subtotal') or '0')
    except InvalidOperation:
        return Response({'error': 'Subtotal must be a number'}, status=status.HTTP_400_BAD_REQUEST)
    if not subtotal.is_finite() or subtotal < 0:
        return Response({'error': 'Subtotal must be a non-negative number'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        return Response(calculate_shipping(country, subtotal))
    except ShippingZoneNotFound:
        logger.warning(f"No shipping zone for country {country}")
        return Response({'error': 'No shipping zone found for this country'}, status=status.HTTP_404_NOT_FOUND)


@api_view(['GET', 'POST', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_shipping_zones(request):
    """
    Shipping zone management on one URL:
    GET lists zones, POST creates, PATCH updates the zone named by ``id``
    in the body, DELETE removes the zone named by ``?id=``.
    """
    if request.method == 'GET':
        zones = ShippingZone.objects.all().order_by('sort_order', 'id')
        return Response(ShippingZoneSerializer(zones, many=True).data)

    if request.method == 'POST':
        serializer = ShippingZoneSerializer(data=request.data)
        if serializer.is_valid():
            zone = serializer.save()
            create_audit_log(request, 'create', 'ShippingZone', zone.id, object_name=zone.name)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    if request.method == 'PATCH':
        updates = dict(request.data.items())
        zone_id = updates.pop('id', None)
        if not zone_id:
            return Response({'error': 'Zone ID is required'}, status=status.HTTP_400_BAD_REQUEST)
        zone = ShippingZone.objects.filter(pk=zone_id).first()
        if zone is None:
            return Response({'error': 'Shipping zone not found'}, status=status.HTTP_404_NOT_FOUND)
        serializer = ShippingZoneSerializer(zone, data=updates, partial=True)
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'ShippingZone', zone.id,
                             changes={'fields': sorted(updates.keys())}, object_name=zone.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    # DELETE
    zone_id = request.query_params.get('id')
    if not zone_id:
        return Response({'error': 'Zone ID is required'}, status=status.HTTP_400_BAD_REQUEST)
    zone = ShippingZone.objects.filter(pk=zone_id).first()
    if zone is None:
        return Response({'error': 'Shipping zone not found'}, status=status.HTTP_404_NOT_FOUND)
    create_audit_log(request, 'delete', 'ShippingZone', zone.id, object_name=zone.name)
    zone.delete()
    return Response({'success': True})

"""Order lifecycle use cases"""
from .create_order import CreateOrder
from .update_order import UpdateOrder
from .change_order_status import ChangeOrderStatus
from .delete_order import DeleteOrder
from .get_order import GetOrder
from .get_order_schedule import GetOrderSchedule
from .list_orders import ListOrders
from .dtos import (
    CreateOrderCommandDTO,
    UpdateOrderCommandDTO,
    ChangeOrderStatusCommandDTO,
    OrderResponseDTO,
    OrderDetailResponseDTO,
    OrderScheduleResponseDTO,
    ScheduleEntryDTO,
    ListOrdersQueryDTO,
    ListOrdersResponseDTO,
    DeleteOrderResponseDTO,
)

__all__ = [
    "CreateOrder",
    "UpdateOrder",
    "ChangeOrderStatus",
    "DeleteOrder",
    "GetOrder",
    "GetOrderSchedule",
    "ListOrders",
    "CreateOrderCommandDTO",
    "UpdateOrderCommandDTO",
    "ChangeOrderStatusCommandDTO",
    "OrderResponseDTO",
    "OrderDetailResponseDTO",
    "OrderScheduleResponseDTO",
    "ScheduleEntryDTO",
    "ListOrdersQueryDTO",
    "ListOrdersResponseDTO",
    "DeleteOrderResponseDTO",
]

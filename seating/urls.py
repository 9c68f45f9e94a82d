from django.urls import path

from . import views_api

# ==============================================================================
# URL PATTERNS
# ==============================================================================
app_name = 'seating'

urlpatterns = [
    # --------------------------------------------------------------------------
    # TABLES
    # --------------------------------------------------------------------------
    path('tables/', views_api.TableListCreateView.as_view(), name='table-list'),
    path('tables/<int:table_id>/seat/', views_api.TableSeatView.as_view(), name='table-seat'),
    path('tables/<int:table_id>/capacity/', views_api.TableCapacityView.as_view(), name='table-capacity'),
]

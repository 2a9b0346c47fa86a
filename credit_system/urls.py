from django.urls import include, path

urlpatterns = [
    path('api/', include('credit_app.urls')),
]

handler404 = 'credit_app.exception_handler.page_not_found'

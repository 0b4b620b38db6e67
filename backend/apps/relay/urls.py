from django.urls import path

from . import views

urlpatterns = [
    path('chat', views.chat, name='chat'),
    path('summarize', views.summarize, name='summarize'),
    path('sample-data', views.sample_data, name='sample_data'),
]

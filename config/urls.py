# Grid views are mounted by the projects that use them; nothing is routed here by default.
urlpatterns = []

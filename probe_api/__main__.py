from probe_api.server import serve

serve()

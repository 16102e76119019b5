import importlib
import pkgutil


def include_routers(app, package_name, package_path):
    # 패키지 내의 모든 모듈을 찾아 router가 있으면 등록
    for _, module_name, _ in sorted(pkgutil.iter_modules(package_path), key=lambda m: m.name):
        module = importlib.import_module(f"menu_server.{package_name}.{module_name}")
        if hasattr(module, "router"):
            app.include_router(module.router)

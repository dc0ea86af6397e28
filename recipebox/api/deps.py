from fastapi import Request

from recipebox.api.controller import RecipeBoxController


def get_controller(request: Request) -> RecipeBoxController:
    return request.app.state.controller

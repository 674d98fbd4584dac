from killingpart.common.schema import CamelModel


class UserModel(CamelModel):
    user_id: int
    username: str
    tag: str
    identifier: str
    profile_image_url: str
    user_role_type: str
    social_type: str


class UserStatics(CamelModel):
    killing_part_count: int = 0
    fan_count: int = 0
    pick_count: int = 0

"""版本信息"""

__version__ = "0.1.0"
__author__ = "TalentFlow Team"
__description__ = "招聘流程管理服务：可拖拽排序的职位、乐观更新客户端、候选人看板与测评"
